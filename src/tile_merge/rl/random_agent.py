from __future__ import annotations

import argparse
import logging
import random

import gymnasium as gym

import tile_merge.env  # noqa: F401
from tile_merge.env.wrappers import ResampleInvalidActionWrapper
from tile_merge.game import Game, GameConfig


def run_demo(grid_size: int = 4, undos: int = 3, seed: int | None = None) -> Game:
    """Build a game and issue one of every verb."""
    game = Game(config=GameConfig(grid_size=grid_size, undos=undos, random_seed=seed))
    game.left()
    game.right()
    game.up()
    game.down()
    game.undo()
    return game


def run_random(steps: int = 200, seed: int | None = None) -> float:
    env = ResampleInvalidActionWrapper(gym.make("TileMerge-4x4-v0"))
    rng = random.Random(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    for _ in range(steps):
        action = rng.randrange(int(env.action_space.n))
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            obs, info = env.reset()
    env.close()
    return total_reward


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--mode", choices=["demo", "random"], default="demo")
    p.add_argument("--grid-size", type=int, default=4)
    p.add_argument("--undos", type=int, default=3)
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--verbose", action="store_true")
    return p


def main() -> None:
    args = build_parser().parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    if args.mode == "random":
        total_reward = run_random(args.steps, args.seed)
        print(f"Random agent total reward: {total_reward:.2f}")
        return
    game = run_demo(args.grid_size, args.undos, args.seed)
    state = game.get_state()
    print(f"score {state['score']}  undos left {state['undos_left']}  history {state['history_length']}")


if __name__ == "__main__":  # pragma: no cover
    main()
