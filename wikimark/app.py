import argparse
import time
from pathlib import Path

from . import __version__
from .classify import classify_token, strip_base_host
from .config import load_config
from .decision import Outcome
from .exceptions import ConfigurationError, MalformedEntityURIError
from .logger import get_logger
from .normalize import generate_permalink
from .pipeline import SleepScheduler, open_in_browser, resolve
from .presentation import ConsolePresenter, HtmlPresenter, Presenter
from .sparql import build_query, build_request_url
from .sparql_client import SparqlClient


class _FanOutPresenter(Presenter):
    def __init__(self, *presenters):
        self.presenters = presenters

    def update_progress(self, progress):
        for p in self.presenters:
            p.update_progress(progress)

    def update_status(self, status):
        for p in self.presenters:
            p.update_status(status)

    def display_results(self, entities):
        for p in self.presenters:
            p.display_results(entities)


def cmd_classify(args: argparse.Namespace, config) -> None:
    token = strip_base_host(args.host, config.base_host)
    print(f"Token: {token}")
    print(f"Classification: {classify_token(token).value}")


def cmd_query(args: argparse.Namespace, config) -> None:
    token = strip_base_host(args.host, config.base_host)
    query = build_query(token, classify_token(token), limit=config.row_limit, language=config.language)
    if args.url:
        print(build_request_url(query, config.sparql_endpoint))
    else:
        print(query)


def cmd_permalink(args: argparse.Namespace, config) -> None:
    try:
        print(generate_permalink(args.uri, config.base_host))
    except MalformedEntityURIError as e:
        raise SystemExit(str(e))


def cmd_resolve(args: argparse.Namespace, config) -> None:
    client = SparqlClient(config)
    console = ConsolePresenter(config.base_host)
    html = HtmlPresenter(config.base_host) if args.html else None
    presenter = _FanOutPresenter(console, html) if html else console

    resolution = resolve(
        args.host,
        navigated_back=args.back,
        now=time.time(),
        config=config,
        fetch=client.fetch_bindings,
        presenter=presenter,
        navigate=None if args.no_open else open_in_browser,
        scheduler=None if args.no_open else SleepScheduler(),
    )

    if html:
        out = Path(args.html)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(html.render(), encoding="utf-8")
        print(f"Wrote {out}")

    decision = resolution.decision
    if decision.navigates:
        print(f"Destination: {decision.url} (after {decision.delay_ms} ms)")

    get_logger().log_metrics_summary()
    if decision.outcome == Outcome.FAILED:
        raise SystemExit(1)


def main(argv=None):
    parser = argparse.ArgumentParser(prog="wikimark", description="Resolve <token>.<base-host> to an official website")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--no-log-file", action="store_true", help="Log to the console only")

    subparsers = parser.add_subparsers(dest="command")
    cls = subparsers.add_parser("classify", help="Show how a host's token would be resolved")
    cls.add_argument("--host", required=True, help="Request host, e.g. q42.wikimark.net")
    cls.set_defaults(func=cmd_classify)

    qry = subparsers.add_parser("query", help="Print the SPARQL query for a host")
    qry.add_argument("--host", required=True, help="Request host, e.g. python.wikimark.net")
    qry.add_argument("--url", action="store_true", help="Print the full endpoint request URL instead")
    qry.set_defaults(func=cmd_query)

    res = subparsers.add_parser("resolve", help="Resolve a host and open the destination")
    res.add_argument("--host", required=True, help="Request host, e.g. q42.wikimark.net")
    res.add_argument("--back", action="store_true", help="Treat as reached via back navigation (no redirect)")
    res.add_argument("--no-open", action="store_true", help="Decide only, do not open a browser")
    res.add_argument("--html", help="Also write the results page to this path")
    res.set_defaults(func=cmd_resolve)

    prm = subparsers.add_parser("permalink", help="Print the subdomain permalink of an entity URI")
    prm.add_argument("--uri", required=True, help="Entity URI, e.g. http://www.wikidata.org/entity/Q42")
    prm.set_defaults(func=cmd_permalink)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    try:
        config = load_config()
    except ConfigurationError as e:
        raise SystemExit(f"Configuration error: {e}")
    get_logger(level=config.log_level, enable_file=not args.no_log_file)

    if hasattr(args, "func"):
        args.func(args, config)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
