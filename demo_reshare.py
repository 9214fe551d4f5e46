"""
Demo: ACSS resharing and recovery
=================================

Reshare a double secret to committees of growing size, let every member
recover its share (one after the other, then on a thread pool) and reconstruct
the secret from t+1 shares.

Usage:
    python demo_reshare.py [curve]
"""

import logging
import sys
import time

from pve_acss import DoubleSecret, Keypair, reconstruct, recover_all, setup
from pve_acss.config import configure_logging

logger = logging.getLogger("demo_reshare")


def run(params, size: int):
    keys = [Keypair.generate(params) for _ in range(size)]
    secret = DoubleSecret.random(params)
    t = size // 3

    start = time.time()
    resharing = secret.reshare([kp.pk for kp in keys], t, params)
    reshare_time = time.time() - start

    # worst case: every member recovers on a single thread
    start = time.time()
    shares = [kp.recover(resharing[idx][1], t) for idx, kp in enumerate(keys)]
    sequential_time = time.time() - start

    start = time.time()
    # threads interleave under the GIL; this checks agreement, not speed-up
    parallel_shares = recover_all(keys, resharing, t)
    parallel_time = time.time() - start

    assert parallel_shares == shares
    assert reconstruct(shares[:t + 1], t, params) == secret

    print(f"n={size:4d} t={t:3d}  reshare {reshare_time:7.3f}s  "
          f"recover(seq) {sequential_time:7.3f}s  recover(threads) {parallel_time:7.3f}s")


def main():
    configure_logging()
    curve = sys.argv[1] if len(sys.argv) > 1 else None
    params = setup(curve)
    logger.info("Using curve %s", params['group_name'])

    print("=" * 70)
    print(f"ACSS resharing on {params['group_name']}")
    print("=" * 70)
    for size in (3, 5, 10, 20, 50):
        run(params, size)


if __name__ == "__main__":
    main()
