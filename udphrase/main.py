# udphrase/main.py
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from conllu import parse_incr

from udphrase.config import load_config
from udphrase.exceptions import UDPhraseError
from udphrase.ingestion.loader import ConlluLoader
from udphrase.ingestion.validators import DataValidator
from udphrase.morphology import filter_tokens, parse_predicates
from udphrase.phrases import extract_nominal_phrases
from udphrase.pipeline import PhrasePipeline
from udphrase.segmentation import RazdelSegmenter
from udphrase.statistics import lexical_stats, most_common, normalize

logger = logging.getLogger("udphrase")


def _dump(data: Any, output: Optional[Path]):
    payload = json.dumps(data, ensure_ascii=False, indent=2)
    if output is None:
        print(payload)
        return
    with open(output, "w", encoding="utf-8") as f:
        f.write(payload)
    logger.info(f"Saved results to {output}")


def cmd_phrases(args, cfg) -> int:
    loader = ConlluLoader.from_config(cfg)
    head_pos = cfg["phrases"]["head_pos"]
    results = []
    failed = 0

    for sentence in loader.load_stream([args.input]):
        try:
            phrases = extract_nominal_phrases(sentence, head_pos=head_pos)
        except UDPhraseError as e:
            failed += 1
            logger.warning(f"Skipped sentence {sentence.sent_id}: {e}")
            continue
        results.append({"sent_id": sentence.sent_id, "phrases": [p.to_dict() for p in phrases]})

    _dump(results, args.output)
    return 1 if failed and args.fail_on_error else 0


def cmd_filter(args, cfg) -> int:
    predicates = parse_predicates(args.feats)
    loader = ConlluLoader.from_config(cfg)
    results = []

    for sentence in loader.load_stream([args.input]):
        found = filter_tokens(sentence, predicates)
        if found:
            results.append({
                "sent_id": sentence.sent_id,
                "tokens": [{"index": t.index, "text": t.text, "pos": t.pos} for t in found],
            })

    _dump(results, args.output)
    return 0


def cmd_ttr(args, cfg) -> int:
    stats_cfg = cfg["statistics"]
    path = Path(args.input)

    if path.suffix == ".conllu":
        loader = ConlluLoader.from_config(cfg)
        raw: List[Any] = [t for s in loader.load_stream([path]) for t in s.tokens]
    else:
        with open(path, "r", encoding="utf-8") as f:
            raw = RazdelSegmenter().words(f.read())

    words = normalize(raw, punct_pos=stats_cfg["punct_pos"])
    if not words:
        logger.error(f"No words left in {path.name} after normalization")
        return 1

    result = lexical_stats(words, precision=stats_cfg["precision"]).to_dict()
    result["most_common"] = most_common(words, stats_cfg["most_common"])
    _dump(result, args.output)
    return 0


def cmd_report(args, cfg) -> int:
    loader = ConlluLoader.from_config(cfg)
    predicates = parse_predicates(args.feats) if args.feats else None
    pipeline = PhrasePipeline(cfg)

    report = pipeline.process(loader.load_stream([args.input]), predicates, show_progress=True)
    report["skipped_invalid"] = loader.skipped
    _dump(report, args.output)
    return 1 if report["errors"] and args.fail_on_error else 0


def cmd_validate(args, cfg) -> int:
    strict = args.strict or cfg["ingestion"]["validation_level"] == "strict"
    with open(args.input, "r", encoding="utf-8") as f:
        report = DataValidator.validate_corpus(parse_incr(f), strict=strict)

    _dump(report, args.output)
    return 1 if report["invalid"] else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="udphrase",
        description="Nominal phrases, morphological filters and lexical statistics over UD-annotated text"
    )
    parser.add_argument("--config", type=Path, default=None, help="YAML config (defaults to config/default.yaml)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("phrases", help="Extract noun-headed phrases from a CoNLL-U file")
    p.add_argument("input", type=Path)
    p.add_argument("-o", "--output", type=Path, default=None)
    p.add_argument("--fail-on-error", action="store_true", help="Exit with 1 if any sentence was malformed")
    p.set_defaults(func=cmd_phrases)

    p = sub.add_parser("filter", help="Find tokens matching morphological features")
    p.add_argument("input", type=Path)
    p.add_argument("--feats", required=True, help="e.g. 'Number=Sing|PronType=Prs'")
    p.add_argument("-o", "--output", type=Path, default=None)
    p.set_defaults(func=cmd_filter)

    p = sub.add_parser("ttr", help="Type/token ratio of a CoNLL-U or plain text file")
    p.add_argument("input", type=Path)
    p.add_argument("-o", "--output", type=Path, default=None)
    p.set_defaults(func=cmd_ttr)

    p = sub.add_parser("report", help="Full per-sentence report with corpus statistics")
    p.add_argument("input", type=Path)
    p.add_argument("--feats", default=None)
    p.add_argument("-o", "--output", type=Path, default=None)
    p.add_argument("--fail-on-error", action="store_true")
    p.set_defaults(func=cmd_report)

    p = sub.add_parser("validate", help="Check CoNLL-U format and duplicate sent_id without building trees")
    p.add_argument("input", type=Path)
    p.add_argument("--strict", action="store_true", help="Also require sent_id and text metadata")
    p.add_argument("-o", "--output", type=Path, default=None)
    p.set_defaults(func=cmd_validate)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # Настройка логирования
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    cfg = load_config(args.config)
    try:
        return args.func(args, cfg)
    except (UDPhraseError, FileNotFoundError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
