from __future__ import annotations

import argparse
import json
import logging
import sys

from patent_chat.config import Settings
from patent_chat.errors import ConfigurationError, PatentNotFoundError, QuestionValidationError
from patent_chat.ingest import build_store, run_ingest
from patent_chat.service import PatentQAService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="patent_chat")
    sub = parser.add_subparsers(dest="command", required=True)

    ingest = sub.add_parser("ingest", help="Structure every PDF in the uploads directory")
    ingest.add_argument("--workers", type=int, default=None)

    sub.add_parser("list", help="List loaded patents")

    show = sub.add_parser("show", help="Show one structured patent record")
    show.add_argument("patent_id")

    ask = sub.add_parser("ask", help="Ask a question about a patent")
    ask.add_argument("patent_id")
    ask.add_argument("question")
    ask.add_argument("--model", default=None)

    sub.add_parser("status", help="Corpus and provider status")
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args(argv)
    settings = Settings()

    if args.command == "ingest":
        records = run_ingest(settings, workers=args.workers)
        print(json.dumps([r.patent_number for r in records], indent=2))
        return 0

    service = PatentQAService.from_settings(settings, build_store(settings).load_all())
    try:
        if args.command == "list":
            result = service.list_patents()
        elif args.command == "show":
            result = service.get_patent(args.patent_id)
        elif args.command == "ask":
            result = service.ask(args.patent_id, args.question, model=args.model)
        else:
            result = service.status()
    except (PatentNotFoundError, QuestionValidationError) as exc:
        print(json.dumps({"error": str(exc)}), file=sys.stderr)
        return 2
    except ConfigurationError as exc:
        print(json.dumps({"error": str(exc)}), file=sys.stderr)
        return 3
    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
