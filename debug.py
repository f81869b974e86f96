# debug.py
from __future__ import annotations
import logging
from typing import Callable, Dict

# every source of diagnostics in the simulator; all start silent
COMPONENTS = ("alphabet", "permutation", "rotor", "stepping", "machine", "config")


class Debug:
    _root_configured: bool = False          # class-level guard

    def __init__(self, *, log_to: str | None = None, name: str = "ENIGMA") -> None:
        """
        One switchboard per module. The root logger is configured by the
        first instance only; `log_to` adds a file next to stderr.
        """
        if not Debug._root_configured:
            handlers: list[logging.Handler] = [logging.StreamHandler()]
            if log_to:
                handlers.append(logging.FileHandler(log_to, encoding="utf-8"))

            logging.basicConfig(
                level=logging.DEBUG,
                format="[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
                handlers=handlers,
            )
            Debug._root_configured = True

        self.logger = logging.getLogger(name)
        self.enabled = True        # global switch
        self.components: Dict[str, bool] = dict.fromkeys(COMPONENTS, False)

    # ── logging API ──────────────────────────────────────────────
    def log(self, component: str, message: str) -> None:
        if self.active(component):
            self.logger.debug("[%s] %s", component.upper(), message)

    def active(self, component: str) -> bool:
        return self.enabled and self.components.get(component, False)

    def sink(self, component: str) -> Callable[[str], None]:
        """A one-argument callable forwarding lines to *component*.

        Handed to `Machine.convert` as its trace so the machine itself
        never consults a switchboard.
        """
        self._require(component)
        return lambda line: self.log(component, line)

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            self.components[c] = True

    def disable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            self.components[c] = False

    def toggle(self, component: str) -> None:
        self._require(component)
        self.components[component] = not self.components[component]

    def toggle_global(self, state: bool) -> None:
        self.enabled = state

    def status(self) -> Dict[str, bool]:
        """Return a *copy* of the current component map."""
        return self.components.copy()

    # ── helpers ──────────────────────────────────────────────────
    def _require(self, component: str) -> None:
        if component not in self.components:
            raise ValueError(f"No such component: {component!r}")

    def __repr__(self) -> str:
        active = [k for k, v in self.components.items() if v]
        return f"<Debug {self.logger.name} enabled={self.enabled} active={active}>"
