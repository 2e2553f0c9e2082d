"""
Syslinux/isolinux config parser.

See http://www.syslinux.org/wiki/index.php?title=Config for the format.
Only DEFAULT, NERFDEFAULT, INCLUDE, MENU LABEL, MENU DEFAULT, LABEL,
KERNEL/LINUX, INITRD and APPEND are interpreted; every other line is skipped.
"""

import os
import posixpath
import sys
from enum import Enum
from pathlib import Path
from typing import List, Optional

from .errors import ConfigNotFound, NotFound
from .fetch import Fetcher, ResourceHandle, default_schemes
from .probe import probe_candidates
from .schema import BootImage, ParserState, Scope
from .urls import directory_of, file_url, resolve

_DEBUG = bool(os.environ.get("SYSLINUXCFG_DEBUG", ""))


def _debug(msg: str) -> None:
    if _DEBUG:
        print(f"[syslinuxcfg] parser: {msg}", file=sys.stderr)


def _warn(msg: str) -> None:
    print(f"[syslinuxcfg] parser: {msg}", file=sys.stderr)


class Directive(str, Enum):
    DEFAULT = "default"
    NERFDEFAULT = "nerfdefault"
    INCLUDE = "include"
    MENU = "menu"
    LABEL = "label"
    KERNEL = "kernel"
    LINUX = "linux"
    INITRD = "initrd"
    APPEND = "append"


_DIRECTIVES = {d.value: d for d in Directive}


class ConfigParser:
    """
    Accumulates directives from one config file and everything it includes.

    `working_directory` is the base URL for relative references in the
    top-level file. Included files resolve their own references against
    their own directory.
    """

    def __init__(self, working_directory: Optional[str], fetcher: Fetcher):
        self.state = ParserState(working_directory=working_directory)
        self.fetcher = fetcher
        self._cwd = working_directory

    def append_file(self, reference: str) -> None:
        """Fetch the config at `reference` and process it."""
        url = resolve(reference, self._cwd)
        self.append(self._read(url))

    def _include(self, reference: str) -> None:
        url = resolve(reference, self._cwd)
        try:
            config = self._read(url)
        except NotFound as exc:
            # Means we didn't find the file. Just ignore it.
            _warn(f"failed to include {reference}: {exc}")
            return
        previous = self._cwd
        self._cwd = directory_of(url)
        try:
            self.append(config)
        finally:
            self._cwd = previous

    def _read(self, url: str) -> str:
        data = self.fetcher.fetch(url)
        _debug(f"got config file {url} ({len(data)} bytes)")
        return data.decode("utf-8", errors="replace")

    def _get_file(self, reference: str) -> ResourceHandle:
        return self.fetcher.lazy_fetch(resolve(reference, self._cwd))

    def _current_entry(self) -> Optional[BootImage]:
        return self.state.entries.get(self.state.current_label)

    def append(self, config: str) -> None:
        """Process `config` line by line into the parser state."""
        state = self.state
        for line in config.split("\n"):
            kv = line.split()
            if len(kv) < 2:
                continue
            directive = _DIRECTIVES.get(kv[0].lower())
            arg = " ".join(kv[1:])

            if directive is None:
                continue

            elif directive is Directive.DEFAULT:
                state.default_label = arg

            elif directive is Directive.NERFDEFAULT:
                state.nerf_default_label = arg

            elif directive is Directive.INCLUDE:
                self._include(arg)

            elif directive is Directive.MENU:
                self._menu(arg.split())

            elif directive is Directive.LABEL:
                # Label scope is entered forever
                state.scope = Scope.ENTRY
                state.current_label = arg
                state.entries[arg] = BootImage(
                    identifier=arg,
                    display_name=arg,
                    command_line=state.global_append,
                )
                state.emission_order.append(arg)
                state.entry_directories[arg] = self._cwd

            elif directive in (Directive.KERNEL, Directive.LINUX):
                entry = self._current_entry()
                if entry is not None:
                    entry.kernel_handle = self._get_file(arg)

            elif directive is Directive.INITRD:
                entry = self._current_entry()
                if entry is not None:
                    # TODO: support comma-separated initrd lists (INITRD a,b)
                    entry.initrd_handle = self._get_file(arg)

            elif directive is Directive.APPEND:
                if state.scope is Scope.GLOBAL:
                    state.global_append = arg
                    continue
                entry = self._current_entry()
                if entry is None:
                    continue
                # Entry append overrides the global one rather than adding to
                # it, and the last APPEND in a label wins.
                entry.command_line = "" if arg == "-" else arg

    def _menu(self, opt: List[str]) -> None:
        if not opt:
            return
        sub = opt[0].lower()
        if sub == "label":
            # Display name only; the identifier stays the same.
            entry = self._current_entry()
            if entry is not None and len(opt) > 1:
                entry.display_name = " ".join(opt[1:])
        elif sub == "default":
            # Only valid after a LABEL statement
            if self.state.scope is Scope.ENTRY:
                self.state.default_label = self.state.current_label


def resolve_order(state: ParserState) -> List[BootImage]:
    """
    Images in boot preference order: nerf default, default, then labels as
    they first appeared. Labels that were never declared are dropped.
    """
    order = []
    if state.nerf_default_label:
        order.append(state.nerf_default_label)
    if state.default_label:
        order.append(state.default_label)
    order.extend(state.emission_order)

    images = []
    seen = set()
    for label in order:
        if label in seen:
            continue
        seen.add(label)
        img = state.entries.get(label)
        if img is not None:
            images.append(img)
    return images


def backfill(state: ParserState, fetcher: Fetcher) -> None:
    """Fetch initrds named by an `initrd=` command line token when no INITRD directive set one."""
    for label, entry in state.entries.items():
        if entry.initrd_handle is not None:
            continue
        for opt in entry.command_line.split():
            key, sep, value = opt.partition("=")
            if not sep or key != "initrd":
                continue
            url = resolve(value, state.entry_directories.get(label, state.working_directory))
            entry.initrd_handle = fetcher.lazy_fetch(url)
            _debug(f"label {entry.identifier}: initrd {url} from command line")
            break


def parse_config(
    working_directory: Optional[str],
    reference: str,
    fetcher: Fetcher,
) -> List[BootImage]:
    """
    Parse the config at `reference` and return its images in boot order.

    `working_directory` is the default scheme, host and path for relative
    references (includes, kernels, initrds); None disables rebasing.
    """
    p = ConfigParser(working_directory, fetcher)
    p.append_file(reference)
    backfill(p.state, fetcher)
    return resolve_order(p.state)


def parse_from_local_directory(
    root: Path,
    fetcher: Optional[Fetcher] = None,
) -> List[BootImage]:
    """Treat `root` as a mount point and parse the first isolinux/syslinux config found under it."""
    if fetcher is None:
        schemes = default_schemes()
        try:
            return parse_from_local_directory(root, schemes)
        finally:
            schemes.close()
    root = Path(root).absolute()
    for relname in probe_candidates():
        d, name = posixpath.split(relname)
        # The initial working directory is the one holding the config file.
        wd = file_url(root / d if d else root)
        try:
            return parse_config(wd, name, fetcher)
        except NotFound as exc:
            _debug(f"skipping {relname}: {exc}")
            continue
    raise ConfigNotFound(f"no valid syslinux config found on {root}")
