"""Check a license the way a desktop app would, through the command bridge."""

from __future__ import annotations

import sys

from offline_license.client import LicenseChecker, LicenseStore, build_bridge, can_use_all_features
from offline_license.config import CheckerConfig


def main() -> None:
    config = CheckerConfig.from_env()
    checker = LicenseChecker.from_config(config)
    bridge = build_bridge(checker)
    store = LicenseStore.from_config(config, checker=checker)

    if len(sys.argv) > 1:
        print("verify_license:", bridge.invoke("verify_license", token=sys.argv[1]))
        status = store.activate(sys.argv[1])
    else:
        status = store.load_saved()
        if status is None:
            print("No saved license. Pass a token to activate one.")
            return

    print("All features unlocked:", can_use_all_features(status))


if __name__ == "__main__":
    main()
