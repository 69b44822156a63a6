"""Issue a license with a throwaway keypair and verify it offline."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from offline_license import LicenseIssuer, LicenseSigner, LicenseVerifier, generate_keypair


def main() -> None:
    private_b64, public_b64 = generate_keypair()
    issuer = LicenseIssuer(LicenseSigner.from_base64(private_b64), product_id="localendar-mvp")
    verifier = LicenseVerifier.from_base64(public_b64)

    issued = issuer.issue("someone@example.com", plan="pro", expires_in_days=30)
    print("TOKEN:", issued.token)
    print("NOW:", verifier.verify(issued.token).to_dict())

    later = datetime.now(timezone.utc) + timedelta(days=31)
    print("IN 31 DAYS:", verifier.verify(issued.token, now=later).to_dict())

    tampered = issued.token.replace(issued.token[5], "A" if issued.token[5] != "A" else "B", 1)
    print("TAMPERED:", verifier.verify(tampered).to_dict())


if __name__ == "__main__":
    main()
