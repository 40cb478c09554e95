"""The Command Line Interface for the package, including Interactive elements.

A hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface): any argument missing from the command
line is asked for interactively, unless `--non-interactive` is given, in which case its default is used.

Typical usage example:

    bigrsa keygen --keysize 1024 -p key.pub -P key.pem
    bigrsa encrypt -p key.pub --message "Hi there!"
    python -m bigrsa decrypt -P key.pem --ciphertext 1f3a...
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import pathlib
import sys
import typing

from pyasn1 import error

import bigrsa
from bigrsa import keyfile
from bigrsa import rsa
from bigrsa.errors import RSAError
from bigrsa.task import KeyGenTask

logger = logging.getLogger(__name__)


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands.",
            choices=["keygen", "encrypt", "decrypt"],
        ),
    "keygen":
        HelpData("Key pair generation utility."),
    "encrypt":
        HelpData("Encryption utility."),
    "decrypt":
        HelpData("Decryption utility."),
    "public_key":
        HelpData(
            description="Location of the public key file.",
            format=pathlib.Path,
        ),
    "private_key":
        HelpData(
            description="Location of the private key file.",
            format=pathlib.Path,
        ),
    "message":
        HelpData(
            description="Message of single-byte characters, or path to a file containing it if starting with `P:`",
            format=str,
        ),
    "ciphertext":
        HelpData(
            description="Ciphertext as a hexadecimal integer.",
            format=str,
        ),
    "keysize":
        HelpData(
            description="Key size (in bits).",
            choices=["512", "1024", "2048", "3072", "4096"],
            default="2048",
        ),
    "pub_exponent":
        HelpData(
            description="Exponent for the public key.",
            format=int,
            advanced=True,
            default=rsa.DEFAULT_EXPONENT,
        ),
    "overwrite":
        HelpData(
            description="Overwrite specified destination files if they exist?",
            choices=["Y", "N"],
            default="N",
        )
}

needs = {
    "keygen": ("public_key", "private_key", "keysize", "pub_exponent"),
    "encrypt": ("public_key", "message"),
    "decrypt": ("private_key", "ciphertext"),
}

pubkey = argparse.ArgumentParser(add_help=False)
pubkey.add_argument("--public_key", "-p", type=help_dict["public_key"].format, help=help_dict["public_key"].description)
privkey = argparse.ArgumentParser(add_help=False)
privkey.add_argument("--private_key",
                     "-P",
                     type=help_dict["private_key"].format,
                     help=help_dict["private_key"].description)
corep = argparse.ArgumentParser(prog="bigrsa")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {bigrsa.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
corep.add_argument("--verbose", "-V", action="store_true", help="Log debug output to stderr")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

keygen = commands.add_parser("keygen", parents=[privkey, pubkey], help=help_dict["keygen"].description)
keygen.add_argument("--keysize", choices=help_dict["keysize"].choices, help=help_dict["keysize"].description)
keygen.add_argument("--pub-exponent",
                    dest="pub_exponent",
                    type=help_dict["pub_exponent"].format,
                    help=help_dict["pub_exponent"].description)
keygen.add_argument("--overwrite", "-o", action="store_const", const="Y", help=help_dict["overwrite"].description)

encrypt = commands.add_parser("encrypt", parents=[pubkey], help=help_dict["encrypt"].description)
encrypt.add_argument("--message", type=help_dict["message"].format, help=help_dict["message"].description)
decrypt = commands.add_parser("decrypt", parents=[privkey], help=help_dict["decrypt"].description)
decrypt.add_argument("--ciphertext", "-c", type=help_dict["ciphertext"].format, help=help_dict["ciphertext"].description)


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default is not None:
        return helper_data.default
    if mode[0]:
        raise IOError(f"Argument {arg} is missing and non-interactive mode is active.")
    return helper_data


def choice_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    choices = helper_data.choices
    vald = set(choices)
    for choice in choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(f"{choice}" + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch in vald:
            return ch
        if not ch and helper_data.default is not None:
            return helper_data.default
        prntr("Please select an option from the list.")


def input_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    if helper_data.default is not None:
        prntr(f"Default value: {helper_data.default}")
        prntr("To accept default just click enter. Otherwise specify value.")
    cls = helper_data.format
    while True:
        ch = input(f"{arg}: ")
        if not ch and helper_data.default is not None:
            return helper_data.default
        if ch == "":
            prntr("Please provide a value.")
            continue
        try:
            return cls(ch)
        except ValueError:
            prntr(f"We could not convert your value to {cls.__name__}.")


def check_message(mess: str) -> str:
    """Parse message for path-notice."""
    if mess.startswith("P:"):
        with open(mess[2:], "r", encoding="latin-1") as f:
            mess = f.read()
    return mess


def run(args: argparse.Namespace, pspr: typing.Callable) -> None:
    """Execute a fully populated subcommand."""
    match args.subcommand:
        case "keygen":
            with KeyGenTask() as task:
                task.start(int(args.keysize), args.pub_exponent)
                pspr("Generating key pair, this may take a while...")
                pub, priv = task.result()
            keyfile.export_private(args.private_key, pub, priv)
            keyfile.export_public(args.public_key, pub)
            pspr("\nKey pair generated!")
        case "encrypt":
            pub = keyfile.import_public(args.public_key)
            ciph = rsa.encrypt(check_message(args.message), pub)
            pspr("Ciphertext:")
            print(format(ciph, "x"))
        case "decrypt":
            pub, priv = keyfile.import_private(args.private_key)
            try:
                ciph = int(args.ciphertext, 16)
            except ValueError as err:
                raise bigrsa.InvalidInputError("Ciphertext is not a hexadecimal integer.") from err
            clear = rsa.decrypt(ciph, priv, pub)
            pspr("Cleartext:")
            print(clear)


def main(argv: list[str] | None = None) -> None:
    """Core Hybrid CLI/ICLI"""
    args = corep.parse_args(argv)
    pstatus = (args.non_interactive, args.advanced)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to bigrsa!\n")
    if not args.subcommand:
        args.subcommand = choice_handler("subcommand", pstatus, pspr)
    for reqs in needs[args.subcommand]:
        if getattr(args, reqs, None) is None:
            if help_dict[reqs].choices is not None:
                res = choice_handler(reqs, pstatus, pspr)
            else:
                res = input_handler(reqs, pstatus, pspr)
            setattr(args, reqs, res)
        else:
            pspr(f"{reqs}: {getattr(args, reqs)}")
    if args.subcommand == "keygen" and (args.private_key.exists() or args.public_key.exists()):
        rs = getattr(args, "overwrite", None)
        if rs is None:
            rs = choice_handler("overwrite", pstatus, pspr)
        if rs == "N":
            print("Destination private or public key already exists!")
            return
    pspr("\nInput Complete! Executing...")
    try:
        run(args, pspr)
    except (RSAError, OSError, error.PyAsn1Error) as err:
        logger.debug("Command %s failed", args.subcommand, exc_info=True)
        print(f"Error: {err}", file=sys.stderr)
        sys.exit(1)
    pspr("Thank you for using bigrsa!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
