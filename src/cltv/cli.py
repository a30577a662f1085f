#!/usr/bin/env python3
"""
CLTV CLI: build, inspect and check `<locktime> OP_CHECKLOCKTIMEVERIFY OP_DROP`

Examples
  python -m cltv.cli build --locktime 400000000 --disasm
  python -m cltv.cli inspect --script 040084d717b175 --minimal
  python -m cltv.cli check --script 040084d717b175 --now 400000000

Notes
- Locktimes below 500000000 are block heights, the rest Unix timestamps.
- `check --now` must be on the same clock as the script's locktime.
"""
import argparse
import logging
import sys
from typing import Any, Dict, NoReturn

from .construct import CheckLocktimeVerify
from .hexutil import file_or_hex
from .outcome import Outcome
from .script import decode_script, disasm

log = logging.getLogger(__name__)


def _fail(message: str) -> NoReturn:
    print(f'ERROR: {message}', file=sys.stderr)
    sys.exit(1)


def _unwrap_or_exit(outcome: Outcome[Any]) -> Any:
    if not outcome.ok:
        kind = getattr(outcome.error, 'kind', None)
        log.debug('rejected: %r (kind=%s)', outcome.error, getattr(kind, 'value', None))
        _fail(str(outcome.error))
    return outcome.unwrap()


def _read_script(args: argparse.Namespace) -> bytes:
    try:
        return file_or_hex('script', args.script, args.script_file)
    except ValueError as e:
        _fail(str(e))


def _match(args: argparse.Namespace) -> CheckLocktimeVerify:
    script = _read_script(args)
    if getattr(args, 'minimal', False):
        try:
            ops = decode_script(script)
        except ValueError as e:
            _fail(str(e))
        return _unwrap_or_exit(CheckLocktimeVerify.match(ops, minimal_encoding_required=True))
    return _unwrap_or_exit(CheckLocktimeVerify.from_script(script))


def _describe(cltv: CheckLocktimeVerify) -> Dict[str, Any]:
    return {
        'locktime': cltv.locktime,
        'clock': cltv.clock.value,
        'locked_to_block': cltv.is_locked_to_block(),
    }


def cmd_build(args: argparse.Namespace) -> None:
    cltv = _unwrap_or_exit(CheckLocktimeVerify.build(args.locktime))
    script = cltv.script()
    if args.json:
        import json
        out = {'script_hex': script.hex(), **_describe(cltv)}
        if args.disasm:
            out['disasm'] = disasm(script)
        print(json.dumps(out))
    else:
        print("script_hex =", script.hex())
        print("clock      =", cltv.clock.value)
        if args.disasm:
            print("disasm     =", disasm(script))


def cmd_inspect(args: argparse.Namespace) -> None:
    cltv = _match(args)
    info = _describe(cltv)
    if args.json:
        import json
        print(json.dumps(info))
    else:
        print('[OK] CLTV construct')
        print('locktime        =', info['locktime'])
        print('clock           =', info['clock'])
        print('locked_to_block =', info['locked_to_block'])


def cmd_check(args: argparse.Namespace) -> None:
    cltv = _match(args)
    spendable = _unwrap_or_exit(cltv.is_spendable(args.now))
    if args.json:
        import json
        print(json.dumps({'spendable': spendable, 'now': args.now, **_describe(cltv)}))
    else:
        print('[OK] spendable' if spendable else '[FAIL] still locked')
        print('locktime =', cltv.locktime)
        print('now      =', args.now)
        print('clock    =', cltv.clock.value)


def _add_script_args(ap: argparse.ArgumentParser) -> None:
    g = ap.add_mutually_exclusive_group(required=True)
    g.add_argument('--script', help='script fragment hex')
    g.add_argument('--script-file', help='read script fragment hex from file')


def main() -> None:
    ap = argparse.ArgumentParser(description="CLTV CLI (build, inspect, check locktime fragments)",
                                 formatter_class=argparse.RawDescriptionHelpFormatter)
    ap.add_argument('-q', '--quiet', action='count', default=0, help='be more quiet')
    ap.add_argument('-v', '--verbose', action='count', default=0,
                    help='be more verbose; -v and -q may be used multiple times')
    sub = ap.add_subparsers(dest='cmd', required=True)

    ap_b = sub.add_parser('build', help='build <locktime> OP_CHECKLOCKTIMEVERIFY OP_DROP')
    ap_b.add_argument('--locktime', required=True, type=int, help='block height (<500000000) or Unix timestamp')
    ap_b.add_argument('--disasm', action='store_true', help='print simple disassembly')
    ap_b.add_argument('--json', action='store_true', help='print JSON output')
    ap_b.set_defaults(func=cmd_build)

    ap_i = sub.add_parser('inspect', help='match a script fragment and show its locktime')
    _add_script_args(ap_i)
    ap_i.add_argument('--minimal', action='store_true', help='require minimally encoded locktime')
    ap_i.add_argument('--json', action='store_true', help='print JSON output')
    ap_i.set_defaults(func=cmd_inspect)

    ap_c = sub.add_parser('check', help='check whether a CLTV fragment is spendable')
    _add_script_args(ap_c)
    ap_c.add_argument('--now', required=True, type=int, help='current block height or Unix timestamp')
    ap_c.add_argument('--minimal', action='store_true', help='require minimally encoded locktime')
    ap_c.add_argument('--json', action='store_true', help='print JSON output')
    ap_c.set_defaults(func=cmd_check)

    args = ap.parse_args()
    verbosity = args.verbose - args.quiet
    logging.basicConfig(format='%(levelname)s: %(message)s',
                        level=max(logging.DEBUG, logging.WARNING - 10 * verbosity))
    args.func(args)

if __name__ == '__main__':
    main()
