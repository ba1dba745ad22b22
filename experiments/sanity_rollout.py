# /experiments/sanity_rollout.py
"""
Scripted players for SkylineEnv, run over a batch of seeds.

  python -m experiments.sanity_rollout                       # random + heuristic, seeds 101..120
  python -m experiments.sanity_rollout -p heuristic -s 7,8,9 # chosen policy/seeds
  python -m experiments.sanity_rollout --actions-dir /tmp/acts

Each episode becomes one CSV row (policy, seed, length, return, score,
end reason); --actions-dir additionally stores the action sequence as
<policy>_<seed>.npy so the run can be fed back through the env.
"""

from __future__ import annotations
import argparse
import csv
from pathlib import Path
from typing import Callable, Dict, List

import numpy as np

from src.env.skyline_env import SkylineEnv

Policy = Callable[[np.ndarray], int]
CSV_FIELDS = ["policy", "seed", "frame_skip", "decisions", "return", "score", "end"]


def make_random(seed: int, jump_prob: float = 0.12) -> Policy:
    rng = np.random.RandomState(10_000 + seed)
    return lambda _obs: int(rng.rand() < jump_prob)


def make_heuristic(seed: int, margin: float = 0.08) -> Policy:
    """Jump while falling whenever the player sinks below the next roof line (or mid-screen if clear)."""
    def act(obs: np.ndarray) -> int:
        y, vy, dx1, top1 = obs[0], obs[1], obs[2], obs[3]
        target = (top1 - margin) if dx1 < 0.5 else 0.5
        return int(y > target and vy >= 0.0)
    return act


POLICIES: Dict[str, Callable[[int], Policy]] = {
    "random": make_random,
    "heuristic": make_heuristic,
}


def play(policy_name: str, seed: int, frame_skip: int, max_decisions: int,
         actions_dir: Path | None = None) -> dict:
    policy = POLICIES[policy_name](seed)
    env = SkylineEnv(frame_skip=frame_skip, max_decisions=max_decisions)
    actions: List[int] = []
    total = 0.0
    info: dict = {}
    end = "cap"
    try:
        obs, info = env.reset(seed=seed)
        while True:
            a = policy(obs)
            actions.append(a)
            obs, r, term, trunc, info = env.step(a)
            total += float(r)
            if term:
                end = info.get("death_cause") or "crash"
                break
            if trunc:
                break
    finally:
        env.close()

    if actions_dir is not None:
        actions_dir.mkdir(parents=True, exist_ok=True)
        np.save(actions_dir / f"{policy_name}_{seed}.npy", np.asarray(actions, dtype=np.int8))

    return {
        "policy": policy_name, "seed": seed, "frame_skip": frame_skip,
        "decisions": len(actions), "return": round(total, 1),
        "score": int(info.get("score", 0)), "end": end,
    }


def main(argv=None):
    ap = argparse.ArgumentParser(description="Batch rollouts of scripted Skyline Flyer players")
    ap.add_argument("-p", "--policy", choices=sorted(POLICIES) + ["all"], default="all")
    ap.add_argument("-s", "--seeds", default="101-120",
                    help="Comma list (7,8,9) or inclusive range (101-120)")
    ap.add_argument("--frame-skip", type=int, default=4)
    ap.add_argument("--max-decisions", type=int, default=5_000)
    ap.add_argument("--csv", type=Path, default=Path("experiments/runs/episodes.csv"))
    ap.add_argument("--actions-dir", type=Path, default=None)
    args = ap.parse_args(argv)

    if "-" in args.seeds:
        lo, hi = (int(v) for v in args.seeds.split("-", 1))
        seeds = list(range(lo, hi + 1))
    else:
        seeds = [int(v) for v in args.seeds.split(",") if v.strip()]
    names = sorted(POLICIES) if args.policy == "all" else [args.policy]

    rows = []
    for name in names:
        for seed in seeds:
            row = play(name, seed, args.frame_skip, args.max_decisions, args.actions_dir)
            rows.append(row)
            print(f"[{name}] seed={seed} decisions={row['decisions']} "
                  f"score={row['score']} return={row['return']} end={row['end']}")
        scores = [r["score"] for r in rows if r["policy"] == name]
        print(f"[{name}] mean score {np.mean(scores):.2f}, best {max(scores)}")

    args.csv.parent.mkdir(parents=True, exist_ok=True)
    with args.csv.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        writer.writerows(rows)
    print(f"Wrote {len(rows)} episodes to {args.csv}")


if __name__ == "__main__":
    main()
