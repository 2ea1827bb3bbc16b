"""
PHE Report - Plotting Utilities
Figures for parametric studies: required area and overall U against the
swept input, saved as PNG under FIGURES_DIR.
"""
import os

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt

import config

plt.rcParams.update({
    'font.size': 11,
    'figure.figsize': (9, 6),
    'figure.dpi': 150,
    'axes.grid': True,
    'grid.alpha': 0.3,
    'axes.labelsize': 12,
    'axes.titlesize': 13,
    'legend.fontsize': 10,
    'lines.linewidth': 2.0,
})

# Hot/cold palette shared by all sweep figures
COLORS = {
    'area': '#FF5722',
    'U': '#00BCD4',
    'text': '#37474F',
}


def save_figure(fig, name, directory=None):
    """Write a figure to <directory>/<name>.png and close it.

    Args:
        fig: matplotlib Figure object
        name: Base filename (without extension)
        directory: Output directory (default: config.FIGURES_DIR)

    Returns:
        str: Absolute path of the PNG
    """
    if directory is None:
        directory = config.FIGURES_DIR
    os.makedirs(directory, exist_ok=True)
    path = os.path.abspath(os.path.join(directory, f'{name}.png'))
    fig.tight_layout()
    fig.savefig(path, bbox_inches='tight')
    plt.close(fig)
    print(f"  Figure saved: {path}")
    return path


def create_dual_axis_plot(x, y_left, y_right, xlabel, left_label, right_label,
                          title, filename, directory=None):
    """Two series on independent y-axes over a shared x-axis.

    The left series is drawn solid with circles, the right one dashed
    with squares; each axis is tinted to match its series.

    Returns:
        str: Path of the saved figure
    """
    fig, ax_left = plt.subplots()
    ax_right = ax_left.twinx()

    line_l, = ax_left.plot(x, y_left, color=COLORS['area'], marker='o', label=left_label)
    line_r, = ax_right.plot(x, y_right, color=COLORS['U'], marker='s',
                            linestyle='--', label=right_label)

    ax_left.set_xlabel(xlabel, color=COLORS['text'])
    for ax, line in ((ax_left, line_l), (ax_right, line_r)):
        ax.set_ylabel(line.get_label(), color=line.get_color())
        ax.tick_params(axis='y', labelcolor=line.get_color())
    ax_right.grid(False)

    ax_left.legend(handles=[line_l, line_r], loc='best')
    ax_left.set_title(title)
    return save_figure(fig, filename, directory)


def plot_sweep(data, xlabel, title, filename, directory=None):
    """Plot required area and overall U from a parametric study.

    Args:
        data: dict from heat_exchanger.performance.sweep_arrays() with
              keys 'value', 'A' and 'U'
        xlabel: x-axis label string
        title: Plot title string
        filename: Base filename for saving (without extension)
        directory: Output directory (default: config.FIGURES_DIR)

    Returns:
        str: Path of the saved figure
    """
    return create_dual_axis_plot(
        data['value'], data['A'], data['U'],
        xlabel, 'Required area (m²)', 'Overall U (W/m²K)',
        title, filename, directory,
    )
