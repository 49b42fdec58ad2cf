from __future__ import annotations
import functools
import logging
import os
from typing import Optional, Sequence

log = logging.getLogger(__name__)


@functools.lru_cache(maxsize=None)
def try_import_oqs():
    """Import liboqs-python once; None when it (or the liboqs library) is missing."""
    try:
        import oqs  # type: ignore
        return oqs
    # liboqs-python calls sys.exit() when the shared library cannot be loaded.
    except (Exception, SystemExit) as exc:
        log.debug("oqs unavailable: %r", exc)
        return None


def pick_sig_algorithm(oqs_mod, env_var: str, candidates: Sequence[str]) -> Optional[str]:
    """
    Robustly choose a SIG mechanism by attempting instantiation.
    Honors the env override first, then tries the candidates in order.
    """
    order: list[str] = []
    env_val = os.getenv(env_var)
    if env_val:
        order.append(env_val)
    order += [c for c in candidates if c != env_val]
    for name in order:
        try:
            with oqs_mod.Signature(name):
                return name
        except Exception:
            log.debug("liboqs mechanism %s not enabled", name)
            continue
    return None
