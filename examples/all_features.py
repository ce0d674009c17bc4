#!/usr/bin/env python3
"""
Tour of ctxlog features.

Usage:
    python examples/all_features.py
    PYTHON_ENV=production python examples/all_features.py
    LOGS_ENABLED=true PYTHON_ENV=production python examples/all_features.py
"""

import os

from ctxlog import Logger, compile_filters, format_filter_set


def main():
    app = Logger(context="app:core")
    noise = Logger(context="app:noise")
    svc = Logger(context="svc:beta")

    payload = {"version": 1, "ok": True}

    print("\n=== Basic logs (on by default outside production) ===")
    app.info("hello from app", payload)
    app.debug("debug detail", {"details": [1, 2, 3]})
    noise.debug("this is noisy")
    svc.info("svc info shows")

    print("\n=== Grouping (level=info, expanded) ===")
    app.group("Compute things", lambda: (
        app.info("step 1"),
        app.warn("step 2 needs attention"),
    ), collapsed=False, level="info")

    print("\n=== Dynamic enable via signals ===")
    print("Set LOGS_ENABLED=true (.ctxlog.json or env) to enable in production;"
          " DISABLE_LOGS=true to hard-off.")
    app.info("still logging if enabled")
    noise.debug("still logging if enabled")
    svc.info("svc still logging if enabled")

    print("\n=== Context filters (DEBUG patterns) ===")
    # Enable only app:* and svc:beta, but exclude app:noise
    os.environ["DEBUG"] = "app:*,-app:noise,svc:beta"
    print(format_filter_set(compile_filters(os.environ["DEBUG"])))
    app.info("app still enabled via DEBUG")
    noise.debug("should NOT show due to exclude")
    svc.info("svc still enabled via DEBUG")
    print(app.explain())
    print(noise.explain())

    print("\n=== Instance override ===")
    off = Logger(context="off", enabled=False)
    off.info("no output expected")
    on = Logger(context="on", enabled=True)
    on.info("forced on via instance")

    print("\nDone.\n")


if __name__ == "__main__":
    main()
