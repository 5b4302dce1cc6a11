import os
import uuid

from flask import current_app, has_request_context, request
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.utils.logging_utils import get_logger

logger = get_logger('file_utils')

UPLOAD_KINDS = {
    'videos': {'.mp4', '.webm', '.mov', '.avi', '.mkv', '.m4v'},
    'thumbnails': {'.jpg', '.jpeg', '.png', '.gif', '.webp'},
    'avatars': {'.jpg', '.jpeg', '.png', '.gif', '.webp'},
}


def ensure_upload_dirs(upload_root):
    for kind in UPLOAD_KINDS:
        os.makedirs(os.path.join(upload_root, kind), exist_ok=True)


def validate_upload(file: FileStorage, kind: str) -> str:
    """허용된 확장자인지 확인하고 소문자 확장자를 반환"""
    if kind not in UPLOAD_KINDS:
        raise ValueError(f"unknown upload kind: {kind}")

    ext = os.path.splitext(secure_filename(file.filename or ''))[1].lower()
    if ext not in UPLOAD_KINDS[kind]:
        raise BusinessError(APIError.VIDEO_FILE_INVALID, f"지원하지 않는 파일 형식입니다: {ext or '(없음)'}")

    return ext


def save_upload(file: FileStorage, kind: str) -> str:
    """
    업로드 파일을 UPLOAD_FOLDER/<kind>/ 아래에 랜덤 파일명으로 저장하고
    DB에 저장할 상대 URL(/uploads/<kind>/<filename>)을 반환
    """
    ext = validate_upload(file, kind)
    original_name = secure_filename(file.filename or '')

    filename = f"{uuid.uuid4().hex}{ext}"
    target_dir = os.path.join(current_app.config['UPLOAD_FOLDER'], kind)
    os.makedirs(target_dir, exist_ok=True)

    file.save(os.path.join(target_dir, filename))
    logger.info(f"파일 저장 완료: {kind}/{filename} (원본: {original_name})")

    return f"/uploads/{kind}/{filename}"


def to_absolute_url(url):
    if not url or url.startswith('http') or not has_request_context():
        return url

    base = request.host_url.rstrip('/')
    return f"{base}{url if url.startswith('/') else '/' + url}"


def delete_upload(url):
    """save_upload가 반환한 상대 URL의 파일을 삭제 (없으면 무시)"""
    if not url or not url.startswith('/uploads/'):
        return

    kind, _, filename = url[len('/uploads/'):].partition('/')
    if kind not in UPLOAD_KINDS or not filename:
        return

    path = os.path.join(current_app.config['UPLOAD_FOLDER'], kind, secure_filename(filename))
    try:
        os.remove(path)
        logger.info(f"업로드 파일 삭제: {kind}/{filename}")
    except FileNotFoundError:
        logger.warning(f"삭제할 업로드 파일 없음: {kind}/{filename}")
