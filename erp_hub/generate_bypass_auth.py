"""Bypass 로그인 자격 증명 생성 스크립트.

Generates a fresh bypass username/password pair and prints the .env lines.

Usage:
    python -m erp_hub.generate_bypass_auth

Prints:
    - Username: admin_ + 64 hex chars
    - Password: 96 hex chars (저장되지 않음, 분실 시 복구 불가)
    - BYPASS_AUTH_USERNAME / BYPASS_AUTH_PASSWORD_HASH 환경 변수 줄
"""

from erp_hub.utils.bypass import generate_bypass_credentials


def main() -> None:
    """자격 증명을 생성하고 콘솔에 출력합니다."""
    print("Generating secure bypass authentication credentials...\n")
    creds = generate_bypass_credentials()

    print("Generated credentials (save these securely!):")
    print("=" * 60)
    print(f"Username: {creds.username}")
    print(f"Password: {creds.password}")
    print(f"Password Hash: {creds.password_hash}")
    print("=" * 60)
    print("\nAdd to your .env file:")
    print(f'BYPASS_AUTH_USERNAME="{creds.username}"')
    print(f'BYPASS_AUTH_PASSWORD_HASH="{creds.password_hash}"')
    print("\nSECURITY NOTICE:")
    print("- The plain password cannot be recovered from the hash")
    print("- Only the hash belongs in environment variables")
    print("- Use these credentials ONLY for testing and diagnostics")


if __name__ == "__main__":
    main()
