from __future__ import annotations

import os
import sys
import argparse
import json as _json
import getpass as _getpass
import tempfile

from pathlib import Path
from typing import List, Optional

from pngme import ops
from pngme.png import Png
from pngme.errors import PngError


def _read_png(path: str) -> Png:
    with open(path, "rb") as fh:
        data = fh.read()
    return Png.parse(data)


def _write_atomic(path: str, data: bytes) -> None:
    """Write ``data`` to ``path`` via a temp file in the same directory and os.replace.

    Args:
        path: Destination file path; replaced only once the new bytes are on disk.
        data: Serialized PNG stream.
    """
    dst = Path(path)
    fd, tmp = tempfile.mkstemp(prefix=".pngme-", suffix=dst.suffix or ".png", dir=str(dst.parent))
    tmp_path = Path(tmp)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        if dst.exists():
            try:
                os.chmod(tmp_path, dst.stat().st_mode & 0o7777)
            except OSError as exc:
                print(f"Warning: failed to copy mode onto {dst}: {exc}", file=sys.stderr)
        else:
            # mkstemp creates 0600; new outputs get the usual umask default
            umask = os.umask(0)
            os.umask(umask)
            os.chmod(tmp_path, 0o666 & ~umask)
        os.replace(str(tmp_path), str(dst))
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise


def cmd_encode(
    path: str,
    chunk_type: str,
    message: str,
    *,
    output: Optional[str] = None,
    password: Optional[str] = None,
) -> bool:
    """Hide ``message`` in a new chunk and write the result.

    Args:
        path: Input PNG.
        chunk_type: Four-letter type for the new chunk (e.g. ``ruSt``).
        message: Text to store.
        output: Destination path. Defaults to overwriting ``path``.
        password: When set, the message is encrypted before it is stored.
    """
    png = _read_png(path)
    ops.encode(png, chunk_type, message, password=password)
    target = output or path
    _write_atomic(target, png.pack())
    # the new chunk sits just before IEND
    print(f"Encoded {png.chunks[-2].length} byte(s) into {chunk_type} chunk: {target}")
    return True


def cmd_decode(path: str, chunk_type: str, *, password: Optional[str] = None) -> bool:
    png = _read_png(path)
    print(ops.decode(png, chunk_type, password=password))
    return True


def cmd_remove(path: str, chunk_type: str, *, output: Optional[str] = None) -> bool:
    png = _read_png(path)
    ops.remove(png, chunk_type)
    target = output or path
    _write_atomic(target, png.pack())
    print(f"Removed {chunk_type} chunk: {target}")
    return True


def cmd_print(path: str, *, as_json: bool = False) -> bool:
    png = _read_png(path)
    summaries = ops.list_chunks(png)
    if as_json:
        print(
            _json.dumps(
                {
                    "path": path,
                    "chunks": [
                        {"type": str(s.chunk_type), "length": s.length, "crc": s.crc} for s in summaries
                    ],
                }
            )
        )
        return True
    print(f"File: {path}")
    print(f"  Chunks: {len(summaries)}")
    for s in summaries:
        flags = "critical" if s.chunk_type.is_critical() else "ancillary"
        print(f"{s.chunk_type}\t{s.length}\t{s.crc:08x}\t{flags}")
    return True


def _resolve_password(args: argparse.Namespace) -> Optional[str]:
    if getattr(args, "ask_password", False):
        return _getpass.getpass("Message password: ")
    return getattr(args, "password", None)


def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(
        prog="pngme",
        description="Hide, reveal and remove messages stored in PNG chunks",
    )
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_encode = sub.add_parser("encode", help="Add a secret message to a PNG")
    ap_encode.add_argument("path", help="Path to the input PNG")
    ap_encode.add_argument("chunk_type", help="Chunk type (like 'ruSt')")
    ap_encode.add_argument("message", help="Your secret message")
    ap_encode.add_argument("output", nargs="?", help="Path to the output PNG (default: overwrite input)")
    ap_encode.add_argument("--password", help="Encrypt the message with this password")
    ap_encode.add_argument("--ask-password", action="store_true", help="Prompt for the encryption password")

    ap_decode = sub.add_parser("decode", help="Show the secret message in a PNG")
    ap_decode.add_argument("path", help="Path to the PNG")
    ap_decode.add_argument("chunk_type", help="Chunk type (like 'ruSt')")
    ap_decode.add_argument("--password", help="Password for an encrypted message")
    ap_decode.add_argument("--ask-password", action="store_true", help="Prompt for the message password")

    ap_remove = sub.add_parser("remove", help="Remove a secret message from a PNG")
    ap_remove.add_argument("path", help="Path to the PNG")
    ap_remove.add_argument("chunk_type", help="Chunk type (like 'ruSt')")
    ap_remove.add_argument("output", nargs="?", help="Path to the output PNG (default: overwrite input)")

    ap_print = sub.add_parser("print", help="Print every chunk in a PNG")
    ap_print.add_argument("path", help="Path to the PNG")
    ap_print.add_argument("--json", action="store_true", help="Emit JSON chunk listing")

    args = ap.parse_args(argv)
    try:
        if args.cmd == "encode":
            cmd_encode(args.path, args.chunk_type, args.message, output=args.output, password=_resolve_password(args))
        elif args.cmd == "decode":
            cmd_decode(args.path, args.chunk_type, password=_resolve_password(args))
        elif args.cmd == "remove":
            cmd_remove(args.path, args.chunk_type, output=args.output)
        elif args.cmd == "print":
            cmd_print(args.path, as_json=args.json)
        else:
            raise RuntimeError("Unknown command")
    except PngError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(e.exit_code)
    except RuntimeError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
