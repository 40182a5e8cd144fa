#! /usr/bin/env python3
# vim:fenc=utf-8
#
# Copyright © 2024-2025 Karol Będkowski <Karol Będkowski@kkomp>
#
# Distributed under terms of the GPLv3 license.

""" """

import argparse
import logging
import pprint
import sys
import typing as ty
from contextlib import contextmanager
from pathlib import Path

from . import config, errors, expimp, model, radio_io

_LOG = logging.getLogger()


def _serial_impl(args: argparse.Namespace) -> radio_io.Serial:
    if args.replay:
        return radio_io.FakeSerial.from_file(args.replay)

    return radio_io.RealSerial(args.port, args.baudrate, args.timeout)


@contextmanager
def _connect(
    args: argparse.Namespace,
) -> ty.Iterator[tuple[radio_io.Radio, str]]:
    with radio_io.connect(_serial_impl(args), args.trace) as radio:
        radio_model = radio.identify()
        _LOG.info("connected to %s", radio_model)
        yield radio, radio_model


def _progress(idx: int, total: int) -> None:
    if idx % 50 == 0:
        _LOG.info("progress: %d/%d", idx, total)


def _memory_file(args: argparse.Namespace) -> Path:
    return args.json_file or Path(config.CONFIG.memory_file)


def main_radio_info(args: argparse.Namespace) -> None:
    """cmd: radio_info"""
    with _connect(args) as (_radio, radio_model):
        print(f"Model: {radio_model}")


def main_read_memory(args: argparse.Namespace) -> None:
    """cmd: read_memory
    args: [<json file>]
    """
    dst = _memory_file(args)
    with _connect(args) as (radio, _model):
        print("Reading memory...")
        mem = radio.read_memory(cb=_progress)

    channels = mem.occupied_channels()
    expimp.create_backup(dst)
    expimp.save_json_file(dst, channels)
    print(f"Saved {dst}; channels: {len(channels)}")


def main_write_memory(args: argparse.Namespace) -> None:
    """cmd: write_memory
    args: [<json file>]
    """
    mem = expimp.load_json_file(_memory_file(args))
    if problems := list(mem.validate()):
        for problem in problems:
            print(problem)

        raise model.ValidateError("memory", f"{len(problems)} invalid channels")

    with _connect(args) as (radio, _model):
        print("Writing memory...")
        cnt = radio.write_memory(mem, cb=_progress)

    print(f"Written channels: {cnt}")


def main_write_channel(args: argparse.Namespace) -> None:
    """cmd: write_channel
    args: <channel> [<json file>]
    """
    mem = expimp.load_json_file(_memory_file(args))
    with _connect(args) as (radio, _model):
        radio.write_channel(mem, args.channel)

    print(f"Written channel {args.channel}")


def main_read_channel(args: argparse.Namespace) -> None:
    """cmd: read_channel
    args: <channel>
    """
    with _connect(args) as (radio, _model):
        chan = radio.read_channel(args.channel)

    if args.verbose > 2:  # noqa: PLR2004
        pprint.pprint(chan)
    elif chan.occupied:
        print(chan)
    else:
        print(f"Channel {chan.number:03d}: empty")


def main_send_command(args: argparse.Namespace) -> None:
    """cmd: send
    args: <command>
    """
    with _connect(args) as (radio, _model):
        print("Response: ", radio.transact(args.command))


def main_print_channels(args: argparse.Namespace) -> None:
    """cmd: channels
    args: [<json file>]
    """
    mem = expimp.load_json_file(_memory_file(args))
    channels = mem.occupied_channels()

    if args.output:
        expimp.export_channels_file(channels, args.output)
        print(f"Saved {args.output}")
    elif args.verbose > 2:  # noqa: PLR2004
        for chan in channels:
            print(chan)
    else:
        print(expimp.export_channels_str(channels), end="")


def main_validate(args: argparse.Namespace) -> None:
    """cmd: validate
    args: [<json file>]
    """
    mem = expimp.load_json_file(_memory_file(args))
    for line in mem.validate():
        print(line)

    print("Validation finished")


def main_save_config(args: argparse.Namespace) -> None:
    """cmd: save_config"""
    config.save(args.config)
    print(f"Saved {args.config}")


def _parse_args_radio_commands(cmds: argparse._SubParsersAction) -> None:  # type: ignore
    cmd = cmds.add_parser("radio_info", help="Get information about radio")
    cmd.set_defaults(func=main_radio_info)

    cmd = cmds.add_parser(
        "read_memory", help="Read all channels from radio into JSON file"
    )
    cmd.add_argument("json_file", type=Path, nargs="?", help="Output file")
    cmd.set_defaults(func=main_read_memory)

    cmd = cmds.add_parser(
        "write_memory", help="Write all channels from JSON file into radio"
    )
    cmd.add_argument("json_file", type=Path, nargs="?", help="Input file")
    cmd.set_defaults(func=main_write_memory)

    cmd = cmds.add_parser(
        "write_channel", help="Write one channel from JSON file into radio"
    )
    cmd.add_argument("channel", type=int, help="Channel number (0-999)")
    cmd.add_argument("json_file", type=Path, nargs="?", help="Input file")
    cmd.set_defaults(func=main_write_channel)

    cmd = cmds.add_parser("read_channel", help="Read one channel from radio")
    cmd.add_argument("channel", type=int, help="Channel number (0-999)")
    cmd.set_defaults(func=main_read_channel)

    cmd = cmds.add_parser("send", help="Send command to radio")
    cmd.add_argument("command", help="Command line to send, i.e. 'ME 001'")
    cmd.set_defaults(func=main_send_command)


def _parse_args_file_commands(cmds: argparse._SubParsersAction) -> None:  # type: ignore
    cmd = cmds.add_parser("channels", help="Print channels from JSON file")
    cmd.add_argument("json_file", type=Path, nargs="?", help="Input file")
    cmd.add_argument(
        "-o", "--output", type=Path, help="Write channels to CSV file"
    )
    cmd.set_defaults(func=main_print_channels)

    cmd = cmds.add_parser("validate", help="Validate JSON file")
    cmd.add_argument("json_file", type=Path, nargs="?", help="Input file")
    cmd.set_defaults(func=main_validate)

    cmd = cmds.add_parser(
        "save_config", help="Save current connection settings"
    )
    cmd.set_defaults(func=main_save_config)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        help="increase log level",
        default=0,
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=config.default_config_path(),
        help="Configuration file",
    )
    parser.add_argument("-p", "--port", help="USB/TTY/COM port")
    parser.add_argument("-b", "--baudrate", type=int, help="Port speed")
    parser.add_argument(
        "-t", "--timeout", type=float, help="Response timeout in seconds"
    )
    parser.add_argument(
        "--trace", type=Path, help="Append raw communication to file"
    )
    parser.add_argument(
        "--replay",
        type=Path,
        help="Use recorded responses from file instead of serial port",
    )

    cmds = parser.add_subparsers(required=True)

    _parse_args_radio_commands(cmds)
    _parse_args_file_commands(cmds)

    return parser.parse_args()


def _apply_config(args: argparse.Namespace) -> None:
    cfg = config.load(args.config)

    if args.port:
        cfg.port = args.port
    else:
        args.port = cfg.port

    if args.baudrate is not None:
        cfg.baudrate = args.baudrate
    else:
        args.baudrate = cfg.baudrate

    if args.timeout is not None:
        cfg.timeout = max(args.timeout, config.MIN_TIMEOUT)

    args.timeout = cfg.timeout


def main() -> None:
    logging.basicConfig()

    args = _parse_args()

    match args.verbose:
        case 0:
            logging.getLogger().setLevel(logging.WARNING)
        case 1:
            logging.getLogger().setLevel(logging.INFO)
        case _:
            logging.getLogger().setLevel(logging.DEBUG)
            model.enable_debug()

    _apply_config(args)

    try:
        args.func(args)

    except KeyboardInterrupt:
        print("Interrupted")
        sys.exit(1)

    except (errors.RadioError, OSError, ValueError) as err:
        _LOG.debug("command failed", exc_info=True)
        print(f"ERROR: {err}")
        sys.exit(1)
