"""cProfile wrapper for Pincel highlighting.

Run with:
    python -m cProfile -o profile.prof benchmarks/profile_highlight.py
    python -m snakeviz profile.prof

Or for direct profiling:
    python benchmarks/profile_highlight.py
"""

from __future__ import annotations

import cProfile
import io
import pstats
import sys


def build_corpus() -> list[tuple[str, str]]:
    """Synthetic code snippets covering every grammar."""
    corpus: list[tuple[str, str]] = []
    for i in range(50):
        corpus.append((
            f'import {{ h{i} }} from "./h{i}.js"\n'
            f"// helper {i}\n"
            f"function run{i}(a, b) {{\n"
            f"  /* sum */ return a + b * {i}.5\n"
            f"}}\n"
            f"const out{i} = run{i}(`x{i}`, 'y')",
            "js",
        ))
        corpus.append((
            f'@page "/item/{i}"\n'
            f"state {{\n  count: {i}\n}}\n"
            f'view {{\n  button @click(inc) "+{i}"\n}}',
            "pulse",
        ))
        corpus.append((
            f"npm install --save-dev pkg{i} # dev dependency\ncd app{i} && npx vite -p {i}",
            "bash",
        ))
    return corpus


def highlight_corpus(iterations: int = 20) -> dict:
    """Highlight the corpus multiple times and return profiling counters."""
    from pincel import highlight_code
    from pincel.profiling import profiled_highlight

    corpus = build_corpus()

    with profiled_highlight() as metrics:
        for _ in range(iterations):
            for source, grammar in corpus:
                highlight_code(source, grammar)
    return metrics.summary()


def main() -> None:
    """Run profiling and print results."""
    print("Pincel Profiling")
    print("=" * 60)
    print(f"Python {sys.version.split()[0]}")

    iterations = 20
    print(f"\nHighlighting synthetic corpus {iterations}x...")

    profiler = cProfile.Profile()
    profiler.enable()

    summary = highlight_corpus(iterations)

    profiler.disable()

    print("\nHighlight counters:")
    for key, value in summary.items():
        print(f"  {key}: {value}")

    print("\n" + "=" * 60)
    print("TOP 30 FUNCTIONS BY CUMULATIVE TIME")
    print("=" * 60 + "\n")

    s = io.StringIO()
    ps = pstats.Stats(profiler, stream=s).sort_stats(pstats.SortKey.CUMULATIVE)
    ps.print_stats(30)
    print(s.getvalue())

    print("\n" + "=" * 60)
    print("TOP 30 FUNCTIONS BY TOTAL (SELF) TIME")
    print("=" * 60 + "\n")

    s = io.StringIO()
    ps = pstats.Stats(profiler, stream=s).sort_stats(pstats.SortKey.TIME)
    ps.print_stats(30)
    print(s.getvalue())


if __name__ == "__main__":
    main()
