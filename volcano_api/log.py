"""
Console output for the web service and the dataset builder.

Status lines are coloured with colorama; regular log records go through
the standard logging module (see setup_logging).
"""

import datetime
import logging
import sys

from colorama import Fore, Style, init

init(autoreset=True)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# level -> (colour, tag printed after the timestamp)
STYLES = {
    "step": (Fore.BLUE + Style.BRIGHT, ">>"),
    "info": (Style.DIM, ""),
    "ok": (Fore.GREEN + Style.BRIGHT, "OK"),
    "warn": (Fore.YELLOW + Style.BRIGHT, "WARN"),
    "err": (Fore.RED + Style.BRIGHT, "ERR"),
}
TITLE = Fore.CYAN + Style.BRIGHT
VALUE = Fore.GREEN


def _emit(level: str, msg: str) -> None:
    colour, tag = STYLES[level]
    stamp = datetime.datetime.now().strftime("%H:%M:%S")
    prefix = f"[{stamp}] {tag}".rstrip()
    print(f"{colour}{prefix}{Style.RESET_ALL} {msg}")


def step(msg: str) -> None:
    _emit("step", msg)


def info(msg: str) -> None:
    _emit("info", msg)


def ok(msg: str) -> None:
    _emit("ok", msg)


def warn(msg: str) -> None:
    _emit("warn", msg)


def err(msg: str) -> None:
    _emit("err", msg)


def header(title: str, width: int = 60) -> None:
    """Boxed section title, e.g. at the start of a dataset build."""
    rule = "=" * width
    print(f"\n{TITLE}{rule}\n  {title}\n{rule}{Style.RESET_ALL}\n")


def summary_table(title: str, rows: list[tuple[str, str]]) -> None:
    """Aligned label/value lines under a title."""
    print(f"\n{TITLE}{title}{Style.RESET_ALL}")
    width = max((len(label) for label, _ in rows), default=0)
    for label, value in rows:
        print(f"  {label.ljust(width)}  {VALUE}{value}{Style.RESET_ALL}")
    print()


def service_banner(host: str, port: int, db_path: str) -> None:
    """Startup notice for the web service."""
    ok("Web Service Started. Don't forget to kill it when done testing!")
    summary_table("Volcano Web Service", [
        ("Listening", f"http://{host}:{port}"),
        ("Dataset", db_path),
    ])


def setup_logging(level: int = logging.INFO) -> None:
    """Send log records for the whole process to stdout."""
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stdout)
