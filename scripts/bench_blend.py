#!/usr/bin/env python3
"""
Blend Benchmark

Times one blend step, the only stepping model that has to search for the
current curve position.

Usage:
    python scripts/bench_blend.py [repeats]
"""
import sys
import timeit

from dimstep.logic.stepping import Blend, calculate


def main():
    """Main entry point"""
    repeats = int(sys.argv[1]) if len(sys.argv) > 1 else 100_000

    blend = Blend(step=5, ratio=0.5, a=2.0, b=4.0)
    seconds = timeit.timeit(lambda: calculate(blend, 3201, 7500), number=repeats)

    print(f"blend: {seconds / repeats * 1e6:.2f} us per step ({repeats} runs)")


if __name__ == "__main__":
    main()
