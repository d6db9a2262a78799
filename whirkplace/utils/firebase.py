# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.

import os
import json
import logging
from typing import Optional

import firebase_admin
from firebase_admin import credentials, messaging

logger = logging.getLogger(__name__)


def init_firebase() -> bool:
    """
    Initializes the Firebase Admin SDK once. Returns False when FIREBASE_ADMIN_JSON
    is not configured, in which case push delivery is switched off.
    """
    if firebase_admin._apps:
        return True

    raw_json = os.getenv("FIREBASE_ADMIN_JSON")
    if not raw_json:
        return False

    try:
        if raw_json.strip().startswith("{"):
            # 🧠 Stringified JSON (e.g. secret injected by the host)
            cred = credentials.Certificate(json.loads(raw_json))
        else:
            # 🧪 Local path to JSON (for dev)
            cred = credentials.Certificate(raw_json)

        firebase_admin.initialize_app(cred)
    except Exception as e:
        raise RuntimeError("❌ Failed to initialize Firebase Admin SDK") from e

    return True


def send_fcm_push(token: str, title: str, body: str, data: Optional[dict] = None) -> Optional[str]:
    """
    Send a push notification via FCM. Returns the FCM message id, or None when
    push is not configured.
    """
    if not init_firebase():
        logger.info("📵 FIREBASE_ADMIN_JSON not set, skipping push")
        return None

    message = messaging.Message(
        notification=messaging.Notification(title=title, body=body),
        token=token,
        data={k: str(v) for k, v in (data or {}).items()},
    )
    return messaging.send(message)
