#!/usr/bin/env python3
"""
Basic usage example for Bitwarden Serve Python SDK
"""

import getpass
import logging
import sys

from bitwarden_serve_sdk import (
    BitwardenServer,
    ClientConfig,
    NotFoundError,
    ServeConfig,
    WrongItemTypeError,
    WrongPasswordError,
)


def main():
    logging.basicConfig(level=logging.INFO)

    if len(sys.argv) != 3:
        print(f"usage: {sys.argv[0]} LOGIN_ID NOTE_ID")
        return 2
    login_id, note_id = sys.argv[1:]

    # Spawn `bw serve` and talk to it
    with BitwardenServer(ServeConfig(port=4628)) as server:
        with server.client(ClientConfig(timeout=10)) as client:
            try:
                client.unlock(getpass.getpass("Master password: "))
            except WrongPasswordError:
                print("Wrong master password")
                return 1

            try:
                login = client.get_login(login_id)
                print(f"Username: {login.username}")

                note = client.get_secure_note(note_id)
                print(f"Note has {len(note)} characters")
            except (NotFoundError, WrongItemTypeError) as e:
                print(f"Lookup failed: {e}")
                return 1
            finally:
                client.lock()

    return 0


if __name__ == "__main__":
    sys.exit(main())
