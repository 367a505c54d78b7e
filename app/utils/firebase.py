# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Taskpulse - Task & Reminder Backend project.
# Licensed under the MIT License - see the LICENSE file for details.

import json
import logging
import firebase_admin
from firebase_admin import credentials, messaging

from app.config import FIREBASE_ADMIN_JSON

logger = logging.getLogger(__name__)


def _ensure_firebase_app() -> bool:
    """Initialise the Admin SDK once. Returns False when push is not configured."""
    if firebase_admin._apps:
        return True

    if not FIREBASE_ADMIN_JSON:
        logger.warning("⚠️ FIREBASE_ADMIN_JSON is not set, native notifications are disabled")
        return False

    try:
        if FIREBASE_ADMIN_JSON.strip().startswith("{"):
            # 🧠 Stringified JSON (e.g., hosted secrets)
            cred = credentials.Certificate(json.loads(FIREBASE_ADMIN_JSON))
        else:
            # 🧪 Local path to JSON (for dev)
            cred = credentials.Certificate(FIREBASE_ADMIN_JSON)

        firebase_admin.initialize_app(cred)
    except Exception as e:
        raise RuntimeError("❌ Failed to initialize Firebase Admin SDK") from e

    return True


def push_configured() -> bool:
    return bool(firebase_admin._apps) or bool(FIREBASE_ADMIN_JSON)


def send_fcm_push(token: str, title: str, body: str, icon: str = None, tag: str = None, data: dict = None):
    """
    Send a native notification via FCM. Web clients get the icon and tag,
    a repeated tag replaces the earlier notification on the device.
    """
    if not _ensure_firebase_app():
        return None

    message = messaging.Message(
        notification=messaging.Notification(title=title, body=body),
        webpush=messaging.WebpushConfig(
            notification=messaging.WebpushNotification(title=title, body=body, icon=icon, tag=tag)
        ),
        token=token,
        data={k: str(v) for k, v in (data or {}).items()}
    )
    return messaging.send(message)
