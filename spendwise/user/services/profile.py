"""Service for user profile pictures."""

from __future__ import annotations

import os
import tempfile
from typing import TYPE_CHECKING

from firebase_admin import storage
from flask import current_app
from google.api_core.exceptions import GoogleAPICallError
from werkzeug.utils import secure_filename

from spendwise.core.constants import PROFILE_PICTURES_PREFIX, UPLOAD_FALLBACK_MESSAGE
from spendwise.errors import UpstreamError

if TYPE_CHECKING:
    from werkzeug.datastructures import FileStorage


def upload_profile_image(user_id: str, file_storage: FileStorage) -> str:
    """Upload a profile picture to Firebase Storage and return the public URL.

    Raises:
        UpstreamError: If the storage service rejects the upload.
    """
    filename = secure_filename(file_storage.filename or "profile.jpg") or "profile.jpg"
    try:
        bucket = storage.bucket()
        blob = bucket.blob(f"{PROFILE_PICTURES_PREFIX}/{user_id}/{filename}")

        with tempfile.NamedTemporaryFile(
            suffix=os.path.splitext(filename)[1]
        ) as temp_file:
            file_storage.save(temp_file.name)
            blob.upload_from_filename(
                temp_file.name, content_type=file_storage.mimetype or None
            )

        blob.make_public()
    except GoogleAPICallError as e:
        current_app.logger.error(f"Error uploading profile picture: {e}")
        raise UpstreamError(
            e.message or f"Failed to upload image. Server responded with {e.code}."
        ) from e
    except (OSError, ValueError) as e:
        current_app.logger.error(f"Error uploading profile picture: {e}")
        raise UpstreamError(UPLOAD_FALLBACK_MESSAGE) from e
    return blob.public_url
