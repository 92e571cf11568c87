"""Benchmark dismark parsing.

Run with:
    pytest benchmarks/benchmark_parse.py --benchmark-only

Or for quick timings:
    python benchmarks/benchmark_parse.py
"""

import time

import pytest

from dismark import ALL_FEATURES, ParseConfig, Parser


def time_parser(parser: Parser, messages: list[str], iterations: int = 100) -> float:
    """Average seconds per pass over ``messages``."""
    for message in messages[:10]:
        parser(message)

    start = time.perf_counter()
    for _ in range(iterations):
        for message in messages:
            parser(message)
    return (time.perf_counter() - start) / iterations


def main() -> None:
    from conftest import REAL_WORLD_MESSAGES

    for name, config in [("default", None), ("all features", ALL_FEATURES)]:
        elapsed = time_parser(Parser(config), REAL_WORLD_MESSAGES)
        per_message = elapsed / len(REAL_WORLD_MESSAGES) * 1e6
        print(f"{name:>14}: {elapsed * 1000:.3f} ms/pass, {per_message:.1f} us/message")


@pytest.mark.benchmark(group="parse-messages")
def test_benchmark_default(benchmark, real_world_messages):
    """Regular message configuration."""
    parser = Parser()

    def parse_all():
        for message in real_world_messages:
            parser(message)

    benchmark(parse_all)


@pytest.mark.benchmark(group="parse-messages")
def test_benchmark_all_features(benchmark, real_world_messages):
    """Every optional rule enabled."""
    parser = Parser(ALL_FEATURES)

    def parse_all():
        for message in real_world_messages:
            parser(message)

    benchmark(parse_all)


@pytest.mark.benchmark(group="parse-long")
def test_benchmark_long_message(benchmark, long_message):
    """One message at the length limit."""
    parser = Parser()
    benchmark(parser, long_message)


@pytest.mark.benchmark(group="parse-long")
def test_benchmark_forum_post(benchmark, forum_post):
    """Headers and nested lists."""
    parser = Parser(ParseConfig(forum_markdown=True))
    benchmark(parser, forum_post)


if __name__ == "__main__":
    main()
