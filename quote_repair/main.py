from pathlib import PurePath
from typing import Optional

from fastapi import FastAPI, UploadFile, File, Form, HTTPException

from .decoding import decode_upload
from .models import FilePreprocessResponse, Format, HealthResponse, PreprocessRequest, PreprocessResult
from .preprocess import preprocess_with_details
from .rules import APP_TITLE, APP_VERSION, FORMAT_BY_EXTENSION, MAX_UPLOAD_BYTES

app = FastAPI(
    title=APP_TITLE,
    description="Repairs unescaped quotes in pasted YAML, JSON and CSV before structural parsing",
    version=APP_VERSION,
)


def resolve_format(filename: str, explicit: Optional[Format]) -> Format:
    if explicit is not None:
        return explicit
    ext = PurePath(filename).suffix.lower()
    if ext not in FORMAT_BY_EXTENSION:
        supported = ", ".join(sorted(FORMAT_BY_EXTENSION))
        raise HTTPException(
            status_code=422,
            detail=f"Unsupported file extension: {ext or '(none)'}. Supported: {supported}",
        )
    return Format(FORMAT_BY_EXTENSION[ext])


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/preprocess", response_model=PreprocessResult)
def preprocess_content(request: PreprocessRequest):
    return preprocess_with_details(request.content, request.format)


@app.post("/preprocess/file", response_model=FilePreprocessResponse)
async def preprocess_file(
    file: UploadFile = File(...),
    format: Optional[Format] = Form(None),
):
    filename = file.filename or ""
    fmt = resolve_format(filename, format)

    raw = await file.read()
    if len(raw) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail=f"File exceeds {MAX_UPLOAD_BYTES} bytes")

    text, encoding = decode_upload(raw)
    return FilePreprocessResponse(
        filename=filename,
        format=fmt,
        encoding=encoding,
        result=preprocess_with_details(text, fmt),
    )
