#!/usr/bin/env python3
import argparse
import functools
import http.server
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from . import fetcher
from .config import FetcherConfig, setup_logging
from .errors import MissingCredentialError
from .export import export_daily, export_hourly
from .viewer import SHORT_RANGE, VIEWS, load_views, project, render_table

logger = logging.getLogger(__name__)


def positive_int(value):
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return n


def projected_views(config):
    raw = load_views(config.short_range_path, config.daily_path)
    return {
        view: project(records, view, config.source, config.display_tz)
        for view, records in raw.items()
    }


def cmd_fetch(args, env=None, session=None):
    try:
        config = FetcherConfig.from_env(env)
    except MissingCredentialError as e:
        print(f"⚠️  {e}", file=sys.stderr)
        return 1

    setup_logging(config.log_file)
    logger.info(f"Fetching {args.days} days for ({config.lat}, {config.lon})")
    fetcher.run(config, args.days, session=session)
    return 0


def cmd_view(args, env=None):
    from . import charts
    from .cover import make_cover

    config = FetcherConfig.from_env(env, require_key=False)
    records = projected_views(config)[args.view]
    print(render_table(records))

    out = Path(args.charts_dir)
    paths = [
        charts.plot_temperature_wind(records, out / f"{args.view}_temp_wind.png"),
        charts.plot_pressure_waves(records, out / f"{args.view}_pressure_waves.png"),
    ]
    print(f"✅ Wrote {paths[0]} / {paths[1]}")
    if args.cover:
        title = "Rotterdam Weather Forecast: " + ("1 Day" if args.view == SHORT_RANGE else "10 Days")
        cover = make_cover(paths, out / f"{args.view}_cover.png", title=title)
        print(f"✅ Created {cover}")
    return 0


def cmd_dashboard(args, env=None):
    from .dashboard import render_dashboard, write_dashboard

    config = FetcherConfig.from_env(env, require_key=False)
    out = args.out or Path(config.output_dir) / "index.html"
    write_dashboard(out, render_dashboard(projected_views(config)))
    print(f"✅ Wrote {out}")
    return 0


def cmd_export(args, env=None):
    config = FetcherConfig.from_env(env, require_key=False)
    out = Path(args.out_dir)
    hourly = export_hourly(config.short_range_path, out / "hourly.csv", config.source)
    daily = export_daily(config.daily_path, out / "daily.csv")
    print(f"✅ Wrote {out / 'hourly.csv'} with {len(hourly)} rows")
    print(f"✅ Wrote {out / 'daily.csv'} with {len(daily)} rows")
    return 0


def cmd_serve(args, env=None):
    config = FetcherConfig.from_env(env, require_key=False)
    handler = functools.partial(
        http.server.SimpleHTTPRequestHandler, directory=str(config.output_dir)
    )
    with http.server.ThreadingHTTPServer(("", args.port), handler) as httpd:
        print(f"Serving {config.output_dir} on http://localhost:{args.port}/")
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0


def build_parser():
    parser = argparse.ArgumentParser(prog="marine-cli", description="Stormglass marine forecast + dashboard")
    sub = parser.add_subparsers(dest="cmd")

    parser.add_argument("--days", type=positive_int, default=10, help="days in the daily artifact")
    parser.set_defaults(func=cmd_fetch)

    p_fetch = sub.add_parser("fetch", help="Fetch both artifacts (default)")
    p_fetch.add_argument("--days", type=positive_int, default=argparse.SUPPRESS)
    p_fetch.set_defaults(func=cmd_fetch)

    p_view = sub.add_parser("view", help="Print the table and plot the charts for one view")
    p_view.add_argument("--view", choices=VIEWS, default=SHORT_RANGE)
    p_view.add_argument("--charts-dir", default="results")
    p_view.add_argument("--cover", action="store_true", help="also combine the charts into one image")
    p_view.set_defaults(func=cmd_view)

    p_dash = sub.add_parser("dashboard", help="Write the HTML dashboard")
    p_dash.add_argument("--out", type=Path, default=None)
    p_dash.set_defaults(func=cmd_dashboard)

    p_export = sub.add_parser("export", help="Export both artifacts to CSV")
    p_export.add_argument("--out-dir", default="results")
    p_export.set_defaults(func=cmd_export)

    p_serve = sub.add_parser("serve", help="Serve the public directory")
    p_serve.add_argument("--port", type=int, default=8000)
    p_serve.set_defaults(func=cmd_serve)

    return parser


def main(argv=None, env=None, session=None):
    load_dotenv()
    args = build_parser().parse_args(argv)
    if args.func is cmd_fetch:
        return cmd_fetch(args, env=env, session=session)
    return args.func(args, env=env)


if __name__ == "__main__":
    sys.exit(main())
