# experiments/run_experiments.py
# Automate experiments: vary variant, samples and output truncation, collect
# state-recovery success/time statistics.
# Runs the generator and the attacker in-process (no oracle needed).

import argparse
import csv
import os
import time

from xoshiro_project.attacker.recover import predict_next, recover_state, truncate
from xoshiro_project.oracle.rng128 import get_variant

OUT_DIR = 'results'
FIELDS = ['variant', 'samples', 'output_bits', 'trial', 'success', 'time_s']


def run_single(variant, samples, output_bits, select='high', seed=0):
    rng = get_variant(variant).seed_from_u64(seed)
    obs = [truncate(rng.next_u32(), output_bits, select) for _ in range(samples)]
    actual_next = truncate(rng.next_u32(), output_bits, select)
    t0 = time.time()
    state = recover_state(obs, variant, output_bits, select)
    success = False
    if state is not None:
        predicted = truncate(predict_next(state, variant, samples), output_bits, select)
        success = predicted == actual_next
    elapsed = time.time() - t0
    return success, elapsed


def run_grid(variants, samples_list, output_bits_list, trials, select='high', writer=None):
    results = []
    for variant in variants:
        for samples in samples_list:
            for output_bits in output_bits_list:
                for trial in range(trials):
                    success, elapsed = run_single(variant, samples, output_bits, select, seed=trial)
                    row = [variant, samples, output_bits, trial, int(success), f"{elapsed:.3f}"]
                    results.append(row)
                    if writer is not None:
                        writer.writerow(row)
    return results


def ensure_results_dir(path=OUT_DIR):
    os.makedirs(path, exist_ok=True)


if __name__ == '__main__':
    parser = argparse.ArgumentParser()
    parser.add_argument('--variants', type=str, default='starstar,plus', help='comma list')
    parser.add_argument('--samples_list', type=str, default='2,3,4,8,64,128,160', help='comma list')
    parser.add_argument('--output_bits_list', type=str, default='32,24,16,8', help='comma list')
    parser.add_argument('--select', type=str, default='high', help="'high' or 'low'")
    parser.add_argument('--trials', type=int, default=10, help='repeats per combo')
    args = parser.parse_args()

    variants = [get_variant(x).VARIANT for x in args.variants.split(',')]
    samples_list = [int(x) for x in args.samples_list.split(',')]
    output_bits_list = [int(x) for x in args.output_bits_list.split(',')]
    ensure_results_dir()
    csv_path = os.path.join(OUT_DIR, f'experiments_{int(time.time())}.csv')
    with open(csv_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(FIELDS)
        for variant in variants:
            print(f"Running variant={variant} select={args.select} trials={args.trials}")
            run_grid([variant], samples_list, output_bits_list, args.trials, args.select, writer)
            f.flush()
    print("Experiments complete. CSV saved at:", csv_path)
