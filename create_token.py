"""Print an access token for a user id.

Usage:
    python create_token.py 7 [lifetime_in_seconds]
"""
import argparse

from enrollment_api.app.core.security import create_access_token


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("user_id", type=int)
    # срок действия, по умолчанию 365 дней (секунды)
    parser.add_argument("expires", type=int, nargs="?", default=365 * 24 * 60 * 60)
    args = parser.parse_args()
    print(create_access_token({"sub": str(args.user_id)}, expires_delta=args.expires))


if __name__ == "__main__":
    main()
