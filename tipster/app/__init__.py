"""Application composition."""

from tipster.app.bootstrap import TipsterApp, build_tipster

__all__ = ["TipsterApp", "build_tipster"]
