# backend/images.py
"""Movie image uploads to Cloudinary."""
from collections import namedtuple

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from flask import current_app
from werkzeug.datastructures import FileStorage

from .errors import ClientInputError, ImageUploadError

UploadResult = namedtuple("UploadResult", ["public_id", "secure_url"])


# ---------------- IMAGE INPUT ----------------
class ImageInput:
    kind = None

    def __init__(self, value):
        self.value = value

    def source(self):
        """What the uploader receives: a path, a URL or a file object."""
        return self.value

    def __eq__(self, other):
        return type(self) is type(other) and self.value == other.value

    def __repr__(self):
        return f"{type(self).__name__}({self.value!r})"


class LocalPath(ImageInput):
    kind = "path"


class RemoteUrl(ImageInput):
    kind = "url"


class UploadedFile(ImageInput):
    kind = "file"

    def source(self):
        return self.value.stream

    def __repr__(self):
        return f"UploadedFile({self.value.filename!r})"


def resolve_image_input(files, values):
    """Pick the image out of a request, if any.

    A multipart file part named ``image`` wins over an ``image`` field.
    Returns None when the request carries no image.
    """
    upload = files.get("image") if files else None
    if isinstance(upload, FileStorage) and upload.filename:
        return UploadedFile(upload)

    raw = values.get("image") if values else None
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise ClientInputError("Image must be a file, a path or a URL")

    raw = raw.strip()
    if not raw:
        return None
    if raw.startswith(("http://", "https://")):
        return RemoteUrl(raw)
    return LocalPath(raw)


# ---------------- CLIENT ----------------
class ImageUploader:
    def __init__(self, cloudinary_config):
        self.folder = cloudinary_config.folder
        cloudinary.config(
            cloud_name=cloudinary_config.cloud_name,
            api_key=cloudinary_config.api_key,
            api_secret=cloudinary_config.api_secret,
            secure=True,
        )

    def upload(self, image: ImageInput) -> UploadResult:
        try:
            result = cloudinary.uploader.upload(image.source(), folder=self.folder)
        except (CloudinaryError, OSError) as e:
            current_app.logger.error("Error uploading image to Cloudinary: %s", e)
            raise ImageUploadError(str(e)) from e

        current_app.logger.info("Uploaded %r as %s", image, result["public_id"])
        return UploadResult(result["public_id"], result["secure_url"])

    def destroy(self, public_id):
        try:
            cloudinary.uploader.destroy(public_id)
        except (CloudinaryError, OSError) as e:
            current_app.logger.error("Could not remove orphaned image %s: %s", public_id, e)
            return False
        current_app.logger.info("Removed orphaned image %s", public_id)
        return True


def get_uploader():
    return current_app.extensions["image_uploader"]
