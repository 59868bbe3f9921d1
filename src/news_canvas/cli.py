"""
CLI entrypoint. Use from project root:
  news-canvas [--locale en] [--output-dir output] [--region Taiwan] [--count 10]
  python main.py (same options)
"""

import argparse

from news_canvas import config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Turn today's headlines into AI artwork (interactive console)"
    )
    parser.add_argument(
        "--locale",
        choices=["zh-TW", "en"],
        default=config.LOCALE,
        help="Language of error messages (default: %(default)s)",
    )
    parser.add_argument(
        "--output-dir",
        default=config.OUTPUT_DIR,
        help="Where saved images/videos go (default: %(default)s)",
    )
    parser.add_argument("--region", default=config.NEWS_REGION, help="Region to search news for")
    parser.add_argument(
        "--count",
        type=int,
        default=config.NEWS_COUNT,
        help="How many headlines to ask for (default: %(default)s)",
    )
    return parser


def main(argv=None) -> None:
    from news_canvas.adapters import default_adapters
    from news_canvas.application.workflow import NewsCanvasWorkflow
    from news_canvas.presentation.console import ConsoleSession

    args = build_parser().parse_args(argv)

    adapters = default_adapters(locale=args.locale, region=args.region, count=args.count)
    workflow = NewsCanvasWorkflow(
        **adapters,
        locale=args.locale,
        output_dir=args.output_dir,
    )

    print("=" * 60)
    print("News Canvas – from today's headlines to visual artwork")
    print("Powered by the Google Gemini API")
    print("=" * 60)
    ConsoleSession(workflow).run()


if __name__ == "__main__":
    main()
