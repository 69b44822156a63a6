"""Generate an Ed25519 keypair and the issuing service's config files."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional

from .config import DEFAULT_PORT, DEFAULT_PRODUCT_ID
from .keys import generate_keypair

ENV_TEMPLATE = """# License Server Configuration
# KEEP THIS FILE SECRET! DO NOT COMMIT TO VERSION CONTROL!

# Ed25519 private key (base64 32-byte seed) for signing licenses
PRIVATE_KEY={private_key}

# Server configuration
PORT={port}

# Product ID
PRODUCT_ID={product_id}
"""

ENV_EXAMPLE_TEMPLATE = """# License Server Configuration Example
# Copy this to .env and fill in your actual values

PRIVATE_KEY=your_private_key_here
PORT={port}
PRODUCT_ID={product_id}
"""

PUBLIC_KEY_TEMPLATE = """# License verification public key
# Set this in the checking application's environment.

LICENSE_PUBLIC_KEY={public_key}
"""

GITIGNORE = ".env\n"


def render_files(*, private_key: str, public_key: str, product_id: str, port: int) -> Dict[str, str]:
    return {
        ".env": ENV_TEMPLATE.format(private_key=private_key, port=port, product_id=product_id),
        ".env.example": ENV_EXAMPLE_TEMPLATE.format(port=port, product_id=product_id),
        "PUBLIC_KEY.txt": PUBLIC_KEY_TEMPLATE.format(public_key=public_key),
        ".gitignore": GITIGNORE,
    }


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Generate an Ed25519 keypair for license signing.")
    p.add_argument("--out-dir", default=".", help="directory for .env, .env.example, PUBLIC_KEY.txt and .gitignore")
    p.add_argument("--product-id", default=DEFAULT_PRODUCT_ID)
    p.add_argument("--port", type=int, default=DEFAULT_PORT)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    out_dir = Path(args.out_dir).expanduser()

    private_key, public_key = generate_keypair()
    print("Keypair generated.\n")
    print("PUBLIC KEY (set LICENSE_PUBLIC_KEY in the checking application):")
    print(f"{public_key}\n")
    print("PRIVATE KEY (written to .env, KEEP SECRET):")
    print(f"{private_key}\n")

    failed = False
    files = render_files(private_key=private_key, public_key=public_key, product_id=args.product_id, port=args.port)
    for name, content in files.items():
        path = out_dir / name
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            print(f"Failed to write {path}: {exc}", file=sys.stderr)
            failed = True
            continue
        print(f"Created {path}")

    print("\nNext steps:")
    print("1. Give PUBLIC_KEY.txt to the checking application")
    print("2. Keep .env private; it holds the signing key")
    print("3. Start the server: offline-license-server")
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
