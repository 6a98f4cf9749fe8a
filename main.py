from __future__ import annotations

import argparse
from pathlib import Path

from app.core.chart import error_svg, render_chart
from app.core.series import build_series
from app.utils.error import ErrorKind, RepositoryError
from app.utils.github import get_star_source


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="GitHub star history charts.")
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the HTTP API with uvicorn.",
    )
    parser.add_argument("--host", default="0.0.0.0", help="Bind address for --serve.")
    parser.add_argument("--port", type=int, default=3000, help="Bind port for --serve.")
    parser.add_argument(
        "--render",
        metavar="OWNER/REPO",
        help="Render the star history chart of a repository to --output.",
    )
    parser.add_argument(
        "--output",
        default="chart.svg",
        help="Destination SVG file used by --render.",
    )
    return parser.parse_args()


def _render(name: str, output: str) -> int:
    source = get_star_source()
    try:
        repo = source.resolve_repository(name)
        try:
            content = render_chart(build_series(source.fetch_star_events(repo)))
        except RepositoryError as exc:
            if exc.kind is not ErrorKind.TOO_MANY_STARS:
                raise
            content = error_svg(exc.message)
    except RepositoryError as exc:
        print(f"Failed to render {name}: {exc}")
        return 1

    Path(output).write_bytes(content)
    print(f"Wrote chart: {output}")
    return 0


def _main() -> int:
    args = _parse_args()
    if args.render:
        return _render(args.render, args.output)
    if args.serve:
        import uvicorn

        uvicorn.run(
            "app.main:app", host=args.host, port=args.port, date_header=False
        )
        return 0
    return 0


if __name__ == "__main__":
    raise SystemExit(_main())
