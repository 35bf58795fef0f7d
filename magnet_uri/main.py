import argparse
import json
import logging
import sys

from .protocol.collector import decode_magnet
from .protocol.errors import MagnetError
from .protocol.magnet import Magnet

logger = logging.getLogger(__name__)


def run_decode(magnet_link: str, as_json: bool = False) -> None:
    magnet = decode_magnet(magnet_link)
    if as_json:
        print(json.dumps(magnet.to_dict()))
    else:
        magnet.show_info()


def run_encode(
    name: str | None,
    length: int | None,
    info_hash: list[str],
    announce: list[str],
    source: list[str],
    keywords: list[str],
    fallback: str | None,
    manifest: str | None,
    experimental: list[tuple[str, str]],
) -> None:
    magnet = Magnet(
        name=name,
        length=length,
        info_hash=info_hash,
        fallback=fallback,
        source=source,
        keywords=keywords,
        manifest=manifest,
        announce=announce,
        experimental=dict(experimental),
    )
    print(magnet.to_uri())


def run_normalize(magnet_link: str) -> None:
    print(decode_magnet(magnet_link).to_uri())


def key_value(text: str) -> tuple[str, str]:
    if "=" not in text:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {text!r}")
    key, value = text.split("=", 1)
    return key, value


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="magnet-uri", description="decode and encode magnet links")
    parser.add_argument("-v", "--verbose", action="store_true", help="show debug logging")
    subparsers = parser.add_subparsers(required=True)

    parser_decode = subparsers.add_parser(
        "decode",
        description="decode magnet link and show its fields",
        help="decode magnet link and show its fields",
    )
    parser_decode.add_argument("--json", action="store_true", dest="as_json", help="print fields as JSON")
    parser_decode.add_argument("magnet_link", type=str, help="magnet link")
    parser_decode.set_defaults(command_cb=run_decode)

    parser_encode = subparsers.add_parser(
        "encode",
        description="build magnet link from fields",
        help="build magnet link from fields",
    )
    parser_encode.add_argument("--name", type=str, help="display name (dn)")
    parser_encode.add_argument("--length", type=int, help="exact length in bytes (xl)")
    parser_encode.add_argument("--info-hash", action="append", default=[], dest="info_hash", help="exact topic URN (xt), repeatable")
    parser_encode.add_argument("--announce", action="append", default=[], help="tracker URL (tr), repeatable")
    parser_encode.add_argument("--source", action="append", default=[], help="exact source URL (xs), repeatable")
    parser_encode.add_argument("--keyword", action="append", default=[], dest="keywords", help="keyword topic (kt), repeatable")
    parser_encode.add_argument("--fallback", type=str, help="acceptable source URL (as)")
    parser_encode.add_argument("--manifest", type=str, help="manifest topic (mt)")
    parser_encode.add_argument("--x", action="append", default=[], type=key_value, dest="experimental", metavar="KEY=VALUE", help="experimental field (x.KEY), repeatable")
    parser_encode.set_defaults(command_cb=run_encode)

    parser_normalize = subparsers.add_parser(
        "normalize",
        description="decode magnet link and encode it again with ordered keys",
        help="decode magnet link and encode it again with ordered keys",
    )
    parser_normalize.add_argument("magnet_link", type=str, help="magnet link")
    parser_normalize.set_defaults(command_cb=run_normalize)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = make_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(asctime)s] [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    command_cb = args.command_cb
    try:
        command_cb(**{k: v for k, v in vars(args).items() if k not in ("command_cb", "verbose")})
    except MagnetError as ex:
        logger.debug("Command failed", exc_info=True)
        sys.stderr.write(f"error: {ex}\n")
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
