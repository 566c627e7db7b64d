"""Benchmark automatic Klondike games."""

import time

from klondike.engine.config import EngineConfig
from klondike.engine.game import GameStatus, KlondikeEngine
from klondike.engine.players import AIPlayer, GreedyPlayer, RandomPlayer, play_game


def benchmark_autoplay(player_name: str, num_games: int = 100, max_moves: int = 2000) -> dict:
    """Play seeded games end to end and time them."""
    start_time = time.perf_counter()

    results = []
    for seed in range(num_games):
        engine = KlondikeEngine(EngineConfig(seed=seed))
        engine.new_game()
        player: AIPlayer = GreedyPlayer(seed=seed) if player_name == "greedy" else RandomPlayer(seed=seed)
        results.append(play_game(engine, player, max_moves=max_moves))

    end_time = time.perf_counter()
    total_duration_s = end_time - start_time

    total_moves = sum(r.moves_played for r in results)

    return {
        "total_games": num_games,
        "total_duration_s": total_duration_s,
        "avg_ms_per_game": (total_duration_s * 1000) / num_games,
        "moves_per_second": total_moves / total_duration_s,
        "avg_moves": total_moves / num_games,
        "avg_foundation_cards": sum(r.foundation_cards for r in results) / num_games,
        "wins": sum(1 for r in results if r.won),
        "stock_limit": sum(1 for r in results if r.status == GameStatus.STOCK_LIMIT_REACHED),
    }


def main():
    """Run autoplay benchmarks for both players."""
    print("=" * 60)
    print("KLONDIKE AUTOPLAY BENCHMARK")
    print("=" * 60)
    print()

    # Warm-up run
    print("Warming up...")
    benchmark_autoplay("random", num_games=5)
    print()

    num_games = 100
    for player_name in ("random", "greedy"):
        print(f"Running {num_games} games ({player_name} player)...")
        results = benchmark_autoplay(player_name, num_games=num_games)

        print(f"  Total duration:   {results['total_duration_s']:.3f}s")
        print(f"  Avg per game:     {results['avg_ms_per_game']:.2f}ms")
        print(f"  Throughput:       {results['moves_per_second']:.0f} moves/sec")
        print(f"  Avg moves:        {results['avg_moves']:.1f}")
        print(f"  Avg on foundations: {results['avg_foundation_cards']:.1f}")
        print(f"  Wins: {results['wins']}, stock limit: {results['stock_limit']}")
        print()


if __name__ == "__main__":
    main()
