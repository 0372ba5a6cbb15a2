#!/usr/bin/env python3
"""
otp_cli.py — CLI wrapper for otp_core.Authenticator

Subcommands:
- init   : create a secret, print it and its otpauth URI
- code   : print the code for a counter / timestamp (or watch TOTP live)
- verify : verify a code (exit status 0 = valid, 1 = invalid)
- uri    : print the otpauth URI for an existing secret

The secret is never stored; pass it with --secret or the OTP_SECRET
environment variable.

eg..:
    otp-authenticator init --issuer MyService --label alice@example
    otp-authenticator code --secret JBSWY3DPEHPK3PXP --watch
    otp-authenticator code --mode hotp --counter 42 --secret JBSWY3DPEHPK3PXP
    otp-authenticator verify --secret JBSWY3DPEHPK3PXP --code 123456 --window 2
"""

import argparse
import logging
import os
import sys
import time

from .exceptions import AuthenticatorError, NoSecretSetError
from .options import DEFAULT_ADJACENT, DEFAULT_DIGITS, DEFAULT_TIME_STEP, SECRET_BYTES, Mode, make_options
from .otp_core import Authenticator

SECRET_ENV = "OTP_SECRET"

logger = logging.getLogger(__name__)


def build_authenticator(args, need_secret: bool = True) -> Authenticator:
    options = make_options(
        args.mode,
        algorithm=args.algorithm,
        digits=args.digits,
        period=args.period,
        adjacent=args.window,
    )
    auth = Authenticator(options)
    if need_secret:
        secret = args.secret or os.environ.get(SECRET_ENV)
        if not secret:
            raise NoSecretSetError(f"No secret set (use --secret or {SECRET_ENV})")
        auth.set_secret(secret)
    return auth


def _data_arg(args):
    # --counter for HOTP, --timestamp for TOTP
    return args.counter if args.mode == Mode.HOTP.value else args.timestamp


# --- CLI command handlers ---
def cmd_init(args) -> int:
    auth = build_authenticator(args, need_secret=False)
    secret = auth.create_secret(args.length)
    logger.debug("Created %s secret for label=%r issuer=%r", args.mode, args.label, args.issuer)
    print(f"[*] Secret (Base32): {secret}")
    print("[*] otpauth URI (import into authenticator apps):")
    print("    " + auth.get_uri(args.label, args.issuer, args.counter))
    return 0


def cmd_code(args) -> int:
    auth = build_authenticator(args)

    if not args.watch:
        code = auth.code(_data_arg(args))
        if args.mode == Mode.TOTP.value:
            print(f"TOTP: {code}  (valid ~{auth.remaining(args.timestamp):2d}s)")
        else:
            print(f"HOTP(counter={args.counter or 0}): {code}")
        return 0

    if args.mode != Mode.TOTP.value:
        raise AuthenticatorError("--watch is only available in TOTP mode")

    print("Press Ctrl+C to quit. Generating TOTP in real time...\n")
    last_code = None
    try:
        while True:
            now = int(time.time())
            code = auth.code(now)
            remaining = auth.remaining(now)
            if code != last_code:
                print(f"TOTP: {code}  (valid ~{remaining:2d}s)")
                last_code = code
            else:
                print(f".. {remaining:2d}s left", end="\r", flush=True)
            time.sleep(1)
    except KeyboardInterrupt:
        print("\nBye.")
    return 0


def cmd_verify(args) -> int:
    auth = build_authenticator(args)
    if auth.verify(args.code, _data_arg(args)):
        print(f"[+] {args.mode.upper()} code is VALID")
        return 0
    print(f"[-] {args.mode.upper()} code is INVALID")
    return 1


def cmd_uri(args) -> int:
    auth = build_authenticator(args)
    print(auth.get_uri(args.label, args.issuer, args.counter))
    return 0


def cmd_help(args) -> int:
    print("'otp-authenticator -h' for help.")
    return 0


# --- Argparse builder ---
def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--mode", choices=[m.value for m in Mode], default=Mode.TOTP.value,
                        help="Code type (default: totp)")
    common.add_argument("--algorithm", default="SHA1", help="HMAC hash: SHA1, SHA256 or SHA512")
    common.add_argument("--digits", type=int, default=DEFAULT_DIGITS, help="Number of OTP digits")
    common.add_argument("--period", type=int, default=DEFAULT_TIME_STEP, help="TOTP time step (seconds)")
    common.add_argument("--window", type=int, default=DEFAULT_ADJACENT,
                        help="Accepted +/- time slices when verifying TOTP")
    common.add_argument("--verbose", action="store_true", help="Verbose output")

    with_secret = argparse.ArgumentParser(add_help=False)
    with_secret.add_argument("--secret", help=f"Base32 secret (default: ${SECRET_ENV})")

    p = argparse.ArgumentParser(description="HOTP/TOTP generator and verifier (RFC 4226 / RFC 6238)")
    sub = p.add_subparsers(dest="cmd")
    p.set_defaults(func=cmd_help, verbose=False)

    # init
    pi = sub.add_parser("init", parents=[common], help="Generate a secret and print its otpauth URI")
    pi.add_argument("--length", type=int, default=SECRET_BYTES, help="Secret size in bytes (>= 16)")
    pi.add_argument("--label", default="user@example", help="Account label for otpauth URI")
    pi.add_argument("--issuer", default="otp-tool", help="Issuer for otpauth URI")
    pi.add_argument("--counter", type=int, help="Initial HOTP counter to put in the URI")
    pi.set_defaults(func=cmd_init)

    # code
    pc = sub.add_parser("code", parents=[common, with_secret], help="Print the current code")
    pc.add_argument("--counter", type=int, help="HOTP counter (default 0)")
    pc.add_argument("--timestamp", type=int, help="TOTP Unix timestamp (default now)")
    pc.add_argument("--watch", action="store_true", help="Show TOTP codes in real time")
    pc.set_defaults(func=cmd_code)

    # verify
    pv = sub.add_parser("verify", parents=[common, with_secret], help="Verify an OTP code")
    pv.add_argument("--code", required=True, help="OTP code to verify")
    pv.add_argument("--counter", type=int, help="HOTP counter (default 0)")
    pv.add_argument("--timestamp", type=int, help="TOTP Unix timestamp (default now)")
    pv.set_defaults(func=cmd_verify)

    # uri
    pu = sub.add_parser("uri", parents=[common, with_secret], help="Print the otpauth URI")
    pu.add_argument("--label", default="user@example", help="Account label for otpauth URI")
    pu.add_argument("--issuer", default="otp-tool", help="Issuer for otpauth URI")
    pu.add_argument("--counter", type=int, help="HOTP counter to put in the URI")
    pu.set_defaults(func=cmd_uri)

    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="[+] %(message)s")

    try:
        return args.func(args)
    except AuthenticatorError as e:
        print(f"[!] {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
