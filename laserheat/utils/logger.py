# -*- coding: utf-8 -*-
"""
Minimal logger; replace with structlog/loguru if desired.

Debug lines are off unless set_debug(True) is called or LASERHEAT_DEBUG is set.
"""
import os, sys, time

_DEBUG = os.environ.get("LASERHEAT_DEBUG", "").lower() not in ("", "0", "false", "no")

def set_debug(enabled: bool) -> None:
    global _DEBUG
    _DEBUG = bool(enabled)

def _stamp() -> str:
    return time.strftime('%H:%M:%S')

def debug(msg: str):
    if _DEBUG:
        print(f"[{_stamp()}] DEBUG: {msg}", file=sys.stderr)
def info(msg: str):  print(f"[{_stamp()}] {msg}", file=sys.stdout)
def warn(msg: str):  print(f"[{_stamp()}] WARNING: {msg}", file=sys.stderr)
def error(msg: str): print(f"[{_stamp()}] ERROR: {msg}", file=sys.stderr)
