#!/usr/bin/env python3
"""Check a comment against Akismet from the command line."""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent / 'src'))

from akismet import AkismetConfig, AkismetError, api

USAGE = (
    "Usage: python3 check_comment.py [--test] <user_ip> <user_agent> <text> [author]\n"
    "  --test  send is_test=1 so Akismet does not learn from this check"
)


def main():
    args = sys.argv[1:]
    test = "--test" in args
    args = [a for a in args if a != "--test"]

    if len(args) < 3:
        print(USAGE)
        sys.exit(1)

    user_ip, user_agent, text = args[:3]
    author = args[3] if len(args) > 3 else None

    config = AkismetConfig.from_env()
    config.setup_logging()

    errors = config.validate()
    if errors:
        for error in errors:
            print(f"❌ {error}")
        sys.exit(1)

    try:
        spam, blatant = api.check(config, user_ip, user_agent, text=text, author=author, test=test)
    except AkismetError as e:
        print(f"❌ Akismet error: {e}")
        sys.exit(1)

    if blatant:
        print("🗑️  Blatant spam - safe to discard")
    elif spam:
        print("⚠️  Spam")
    else:
        print("✓ Not spam")


if __name__ == "__main__":
    main()
