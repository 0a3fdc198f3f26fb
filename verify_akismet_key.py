#!/usr/bin/env python3
"""Verify the Akismet API key configured in .env."""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent / 'src'))

from akismet import AkismetConfig, AkismetError, api


def main():
    config = AkismetConfig.from_env()
    config.setup_logging()

    errors = config.validate()
    if errors:
        for error in errors:
            print(f"❌ {error}")
        sys.exit(1)

    try:
        valid = api.verify_key(config)
    except AkismetError as e:
        print(f"❌ Akismet error: {e}")
        sys.exit(1)

    if valid:
        print(f"✓ Key is valid for {config.app_url}")
    else:
        print(f"❌ Key is NOT valid for {config.app_url}")
        sys.exit(1)


if __name__ == "__main__":
    main()
