from __future__ import annotations

from typing import Callable, List, Optional, Sequence
import argparse
import sys

from . import log as rtty_log
from .audio import RttyTransmitter, sink_kind
from .config import ConfigError, WPM_BIT_MS, SHIFTS, load_config
from .sinks.interface import SinkError
from .sources.text import ArgumentSource, FileSource


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="rtty-tone",
        description="Generate RTTY (Baudot FSK) audio from text.",
    )
    src = p.add_mutually_exclusive_group()
    src.add_argument("--keyboard", action="store_true", help="transmit keystrokes interactively")
    src.add_argument("--test-data", action="store_true", help="send the RYRY/SGSG test pattern")
    src.add_argument("--input-file", metavar="PATH", help="transmit the contents of a text file")

    p.add_argument("--config", metavar="YAML", help="YAML configuration file")
    p.add_argument("--output-dev", dest="output", metavar="DEV",
                   help="audio device name/index, '-' for raw stdout, or a .wav/.raw path")
    p.add_argument("--speed", dest="sample_rate", type=int, metavar="HZ", help="sample rate (5000-48000)")
    p.add_argument("--bits", type=int, choices=(8, 16), help="sample depth")
    p.add_argument("--volume", type=int, metavar="PCT", help="0-100")
    p.add_argument("--wpm", type=int, choices=sorted(WPM_BIT_MS), help="words per minute")
    p.add_argument("--freq", dest="freq_low", type=int, metavar="HZ", help="space tone (500-3000)")
    p.add_argument("--shift", type=int, choices=SHIFTS, help="mark/space shift in Hz")
    p.add_argument("--log-level", default="WARNING", help="logging level (default: WARNING)")
    p.add_argument("text", nargs="*", help="text to transmit")
    return p


def _echo_to(stream) -> Callable[[str], None]:
    def _echo(text: str) -> None:
        stream.write(text)
        stream.flush()
    return _echo


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    rtty_log.configure(args.log_level)
    logger = rtty_log.stdlib_logger()

    overrides = {
        "output": args.output,
        "sample_rate": args.sample_rate,
        "bits": args.bits,
        "volume": args.volume,
        "wpm": args.wpm,
        "freq_low": args.freq_low,
        "shift": args.shift,
    }
    try:
        cfg = load_config(args.config, overrides)
    except ConfigError as e:
        print(f"rtty-tone: {e}", file=sys.stderr)
        return 1

    # stdout may be carrying the PCM itself
    echo_stream = sys.stderr if cfg.output == "-" else sys.stdout
    words: List[str] = list(args.text)

    try:
        with RttyTransmitter(cfg, logger=logger, echo=_echo_to(echo_stream)) as tx:
            if args.test_data:
                report = tx.run_test_pattern()
            elif args.keyboard:
                report = tx.run_keyboard()
            elif args.input_file:
                report = tx.transmit_source(FileSource(args.input_file))
            else:
                report = tx.transmit_source(ArgumentSource(words))
    except SinkError as e:
        print(f"rtty-tone: audio output {cfg.output!r} ({sink_kind(cfg.output)}): {e}", file=sys.stderr)
        return 1
    except MemoryError:
        print("rtty-tone: out of memory allocating audio buffers", file=sys.stderr)
        return 1

    if report.error:
        print(f"\nrtty-tone: {report.error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
