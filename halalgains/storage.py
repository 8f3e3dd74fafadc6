import os
import uuid

from flask import current_app
from werkzeug.utils import secure_filename


class UploadError(ValueError):
    pass


def allowed_file(filename):
    extensions = current_app.config['UPLOAD_EXTENSIONS']
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in extensions


def save_upload(file, bucket):
    """
    Store an uploaded image under UPLOAD_FOLDER/<bucket>/ and return the
    public URL it is served from.
    """
    if not file or not file.filename:
        raise UploadError("No file provided")
    if not allowed_file(file.filename):
        raise UploadError("File type not allowed")

    filename = secure_filename(file.filename)
    filename = f"{uuid.uuid4().hex[:12]}_{filename}"

    folder = os.path.join(current_app.config['UPLOAD_FOLDER'], secure_filename(bucket))
    os.makedirs(folder, exist_ok=True)
    file.save(os.path.join(folder, filename))

    current_app.logger.info("Stored upload %s/%s", bucket, filename)
    return f"/uploads/{secure_filename(bucket)}/{filename}"
