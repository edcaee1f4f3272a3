"""Runtime helpers for configuring the host environment."""

from __future__ import annotations

import logging
import os


def configure_environment() -> None:
    """Apply runtime tweaks required by TensorFlow Lite/MediaPipe before loading a model.

    MediaPipe prints GLOG and absl banners on every graph creation; the engine
    creates a graph per provider attempt, so the noise is silenced once here
    from whichever entry point loads the estimator first.
    """

    os.environ.setdefault("TF_CPP_MIN_LOG_LEVEL", "2")
    os.environ.setdefault("GLOG_minloglevel", "2")

    try:
        from absl import logging as absl_logging
    except ImportError:
        return

    absl_logging.set_verbosity(absl_logging.ERROR)
    logging.getLogger("absl").setLevel(logging.ERROR)
