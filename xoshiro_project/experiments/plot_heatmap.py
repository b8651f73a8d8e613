"""
Heatmap of state-recovery success: x axis = samples (outputs observed),
y axis = output_bits (bits revealed per output), cell = success rate
(mean success = successes / trials), one plot per generator variant.

CSV expected columns: variant, samples, output_bits, trial, success
 - variant: 'plus' or 'starstar'
 - samples: int (e.g. 2,3,4...)
 - output_bits: int (e.g. 32,24,16...)
 - trial: int (trial id)
 - success: 0 or 1

Usage:
    python -m xoshiro_project.experiments.plot_heatmap --csv results/experiments_XXXX.csv --variant starstar
"""

import argparse
import os

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

REQUIRED_COLUMNS = {'variant', 'samples', 'output_bits', 'trial', 'success'}


def prepare_pivot(df, variant=None):
    if variant is not None:
        df = df[df['variant'] == variant]
    # compute mean success rate for each (samples, output_bits)
    agg = df.groupby(['output_bits', 'samples'], as_index=False)['success'].mean()
    # rows = output_bits, cols = samples
    pivot = agg.pivot(index='output_bits', columns='samples', values='success')
    # larger output_bits on top
    pivot = pivot.sort_index(ascending=False)
    return pivot


def plot_heatmap(pivot, title='State Recovery Success Rate', out_file=None, annotate=True, show=True):
    rows = pivot.index.tolist()
    cols = pivot.columns.tolist()
    data = pivot.values  # may contain NaN for missing combos

    fig, ax = plt.subplots(figsize=(0.8*len(cols)+3, 0.6*len(rows)+2))
    im = ax.imshow(data, aspect='auto', interpolation='nearest', vmin=0.0, vmax=1.0)

    ax.set_xticks(np.arange(len(cols)))
    ax.set_yticks(np.arange(len(rows)))
    ax.set_xticklabels(cols)
    ax.set_yticklabels(rows)
    ax.set_xlabel('Number of Samples (outputs observed)')
    ax.set_ylabel('Output bits revealed per sample')
    ax.set_title(title)

    # rotate xtick labels if many
    plt.setp(ax.get_xticklabels(), rotation=45, ha='right')

    if annotate:
        for i in range(len(rows)):
            for j in range(len(cols)):
                val = data[i, j]
                if np.isnan(val):
                    ax.text(j, i, 'N/A', ha='center', va='center', color='gray', fontsize=9)
                else:
                    ax.text(j, i, f"{val:.2f}", ha='center', va='center',
                            color='white' if val > 0.5 else 'black', fontsize=9)

    cbar = fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04)
    cbar.set_label('Mean success rate (0-1)')

    plt.tight_layout()
    if out_file:
        os.makedirs(os.path.dirname(out_file) or '.', exist_ok=True)
        plt.savefig(out_file, dpi=300)
        print(f"Heatmap saved to {out_file}")
    if show:
        plt.show()
    return fig


def load_results(path):
    df = pd.read_csv(path)
    if not REQUIRED_COLUMNS.issubset(set(df.columns)):
        raise SystemExit(f"CSV must contain columns: {REQUIRED_COLUMNS}. Found: {df.columns.tolist()}")
    df['samples'] = df['samples'].astype(int)
    df['output_bits'] = df['output_bits'].astype(int)
    df['success'] = df['success'].astype(float)
    return df


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument('--csv', required=True, help='Path to experiments CSV')
    parser.add_argument('--variant', default=None, help="'plus' or 'starstar' (default: all rows)")
    parser.add_argument('--out', default='results/heatmap_success_rate.png', help='Output PNG path')
    parser.add_argument('--title', default=None, help='Plot title')
    parser.add_argument('--no-show', action='store_false', dest='show', help='only save the figure')
    args = parser.parse_args(argv)

    df = load_results(args.csv)
    pivot = prepare_pivot(df, args.variant)
    title = args.title or f"State Recovery Success Rate ({args.variant or 'all variants'})"
    plot_heatmap(pivot, title=title, out_file=args.out, annotate=True, show=args.show)


if __name__ == '__main__':
    main()
