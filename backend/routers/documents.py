from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from backend.config import Settings, get_settings
from backend.routers.common import api_error, bad_request, failed
from backend.services import ai_adapter
from backend.services.uploads import UploadTooLargeError, temporary_upload
from ai_core.ingest import DocumentKind, EmptyDocumentError, kind_from_filename
import logging

logger = logging.getLogger("backend.documents")
router = APIRouter()


def _summarize_upload(file: UploadFile, language: Optional[str], settings: Settings, pdf_only: bool) -> str:
    with temporary_upload(file, settings.upload_dir, settings.max_upload_bytes) as path:
        kind = kind_from_filename(file.filename)
        if pdf_only and kind is not DocumentKind.PDF:
            logger.warning(f"⚠️ Unsupported upload type: {file.filename}")
            raise bad_request("unsupported_type", hint="Upload a PDF file.")
        if kind is None:
            logger.warning(f"⚠️ Unsupported upload type: {file.filename}")
            raise bad_request("unsupported_type", hint="Upload a PDF, DOCX, TXT or MD file.")
        try:
            text = ai_adapter.extract_document(path, kind)
        except EmptyDocumentError:
            logger.warning(f"⚠️ No extractable text in {file.filename}")
            raise bad_request("empty_pdf" if pdf_only else "empty_document")
        return ai_adapter.summarize(text, language, from_upload=True, settings=settings)


@router.post("/summarize-pdf")
def summarize_pdf(
    file: Optional[UploadFile] = File(None),
    language: Optional[str] = Form(None),
    settings: Settings = Depends(get_settings),
):
    if file is None:
        logger.warning("⚠️ PDF summary request without file")
        raise bad_request("no_file")
    try:
        logger.info(f"📄 PDF summary request: filename={file.filename}, language={language}")
        summary = _summarize_upload(file, language, settings, pdf_only=True)
        logger.info(f"✅ PDF summary generated: {len(summary)} chars")
        return {"summary": summary}
    except HTTPException:
        raise
    except UploadTooLargeError as e:
        logger.warning(f"⚠️ Upload rejected: {e}")
        raise api_error(413, "payload_too_large", hint=f"Keep uploads under {e.limit} bytes.")
    except Exception as e:
        logger.error(f"❌ PDF summary failed: {str(e)}")
        logger.exception(e)
        raise failed("summarize_pdf_failed", e)


@router.post("/summarize-document")
def summarize_document(
    file: Optional[UploadFile] = File(None),
    language: Optional[str] = Form(None),
    settings: Settings = Depends(get_settings),
):
    if file is None:
        logger.warning("⚠️ Document summary request without file")
        raise bad_request("no_file")
    try:
        logger.info(f"📄 Document summary request: filename={file.filename}, language={language}")
        summary = _summarize_upload(file, language, settings, pdf_only=False)
        logger.info(f"✅ Document summary generated: {len(summary)} chars")
        return {"summary": summary}
    except HTTPException:
        raise
    except UploadTooLargeError as e:
        logger.warning(f"⚠️ Upload rejected: {e}")
        raise api_error(413, "payload_too_large", hint=f"Keep uploads under {e.limit} bytes.")
    except Exception as e:
        logger.error(f"❌ Document summary failed: {str(e)}")
        logger.exception(e)
        raise failed("summarize_document_failed", e)
