"""
PHE Report - Table & Export Utilities
Formats result records for the console and writes snapshot files.
"""

import json
import os
from datetime import datetime


# Display name, unit and decimal places of each result field
RESULT_FIELDS = (
    ('T_h_in', 'Hot fluid inlet temperature', '°C', 1),
    ('T_h_out', 'Hot fluid outlet temperature', '°C', 1),
    ('T_c_in', 'Cold fluid inlet temperature', '°C', 1),
    ('T_c_out', 'Cold fluid outlet temperature', '°C', 1),
    ('Q', 'Heat duty', 'kW', 2),
    ('m_h', 'Hot mass flow rate', 'kg/s', 2),
    ('m_c', 'Cold mass flow rate', 'kg/s', 2),
    ('LMTD', 'LMTD', '°C', 2),
    ('v_h', 'Hot fluid velocity', 'm/s', 3),
    ('v_c', 'Cold fluid velocity', 'm/s', 3),
    ('Re_h', 'Hot Reynolds number', '', 0),
    ('Pr_h', 'Hot Prandtl number', '', 2),
    ('Nu_h', 'Hot Nusselt number', '', 1),
    ('Re_c', 'Cold Reynolds number', '', 0),
    ('Pr_c', 'Cold Prandtl number', '', 2),
    ('Nu_c', 'Cold Nusselt number', '', 1),
    ('U', 'Overall U', 'W/m²K', 0),
    ('A', 'Required area', 'm²', 2),
)


def result_rows(res):
    """Display rows for a result record.

    Args:
        res: PHEResults

    Returns:
        list of (name, formatted value, unit) tuples
    """
    return [(name, f"{getattr(res, key):.{dp}f}", unit)
            for key, name, unit, dp in RESULT_FIELDS]


def snapshot(inputs_dict, results_dict, timestamp=None):
    """Assemble a timestamped snapshot record.

    Args:
        inputs_dict: Plain dict of the inputs (see describe_inputs)
        results_dict: Plain dict of the results (see PHEResults.to_dict)
        timestamp: datetime to stamp (default: now)

    Returns:
        dict with keys 'timestamp', 'inputs', 'results'
    """
    if timestamp is None:
        timestamp = datetime.now()
    return {
        'timestamp': timestamp.isoformat(timespec='seconds'),
        'inputs': inputs_dict,
        'results': results_dict,
    }


def save_results_json(inputs_dict, results_dict, filename, timestamp=None):
    """Save a timestamped snapshot of one calculation as JSON.

    Args:
        inputs_dict: Plain dict of the inputs
        results_dict: Plain dict of the results
        filename: Output file path
        timestamp: datetime to stamp (default: now)

    Returns:
        str: Path written
    """
    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)
    record = snapshot(inputs_dict, results_dict, timestamp)
    with open(filename, 'w', encoding='utf-8') as f:
        json.dump(record, f, indent=2, ensure_ascii=False)
    print(f"  Results saved: {filename}")
    return filename


def load_results_json(filename):
    """Read a snapshot written by save_results_json().

    Args:
        filename: Snapshot file path

    Returns:
        dict with keys 'timestamp', 'inputs', 'results'
    """
    with open(filename, encoding='utf-8') as f:
        record = json.load(f)
    for key in ('timestamp', 'inputs', 'results'):
        if key not in record:
            raise ValueError(f"Snapshot {filename} is missing '{key}'")
    return record


def save_results_text(res, filename, title='PHE PERFORMANCE RESULTS'):
    """Save a plain-text summary of one result record.

    Args:
        res: PHEResults
        filename: Output file path
        title: Report heading
    """
    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(filename, 'w', encoding='utf-8') as f:
        f.write("=" * 60 + "\n")
        f.write(f"  {title}\n")
        f.write(f"  Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
        f.write("=" * 60 + "\n\n")
        for name, value, unit in result_rows(res):
            f.write(f"  {name:<32s}  {value:>14s}  {unit}\n")
        f.write("\n" + "=" * 60 + "\n")
    print(f"  Plain-text summary saved: {filename}")
