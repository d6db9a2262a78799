# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.

import os
from sqlalchemy.types import TypeDecorator, Text
from cryptography.fernet import Fernet, MultiFernet, InvalidToken

# ✅ Optional: load from .env in dev
if os.getenv("ENV") != "production":
    from dotenv import load_dotenv
    load_dotenv()


def build_cipher(secret: str) -> MultiFernet:
    """
    FERNET_SECRET may hold several comma-separated keys. The first one encrypts,
    all of them decrypt, so a key can be rotated without rewriting old rows.
    """
    keys = [k.strip() for k in secret.split(",") if k.strip()]
    if not keys:
        raise ValueError("FERNET_SECRET does not contain any key.")
    try:
        return MultiFernet([Fernet(k) for k in keys])
    except Exception as e:
        raise ValueError("FERNET_SECRET is invalid. Each key must be a valid 32-byte base64 string.") from e


# 🔐 Get Fernet secret(s)
FERNET_SECRET = os.getenv("FERNET_SECRET")

if not FERNET_SECRET:
    raise EnvironmentError("FERNET_SECRET is missing. Please set it in your environment or .env file.")

cipher = build_cipher(FERNET_SECRET)


def encrypt(text: str) -> str:
    return cipher.encrypt(text.encode()).decode()


def decrypt(token: str) -> str:
    try:
        return cipher.decrypt(token.encode()).decode()
    except InvalidToken as e:
        raise ValueError("Stored value could not be decrypted with any configured key.") from e


# 🧩 Encrypted column for user-authored free text (comments, notifications)
class EncryptedText(TypeDecorator):
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None:
            return encrypt(value)
        return value

    def process_result_value(self, value, dialect):
        if value is not None:
            return decrypt(value)
        return value
