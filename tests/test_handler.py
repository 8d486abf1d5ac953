import json

import pytest

from batch_ocr.handler import handler, lambda_handler


def test_lambda_handler_without_files():
    out = lambda_handler({})

    assert out["statusCode"] == 200
    assert out["headers"] == {"Content-Type": "application/json"}
    assert json.loads(out["body"]) == {"message": "No files have been passed to processing.", "results": []}


def test_lambda_handler_with_none_event():
    assert lambda_handler(None)["statusCode"] == 200


@pytest.mark.asyncio
async def test_handler_processes_files(docs, manager, engine_factory):
    event = {
        "files": [
            {"fileBuffer": docs.b64(docs.build_jpeg_bytes()), "filename": "a.jpg", "contentType": "image/jpeg"},
            {"fileBuffer": docs.b64(b"plain"), "filename": "b.txt", "contentType": "text/plain"},
        ]
    }

    out = await handler(event, manager)

    assert out["statusCode"] == 200
    body = json.loads(out["body"])
    assert body["message"] == "Text extraction completed"
    assert [r["success"] for r in body["results"]] == [True, False]
    assert body["results"][1]["error"] == "Unsupported file type: text/plain"
    assert engine_factory.engines[0].terminated is True


@pytest.mark.asyncio
async def test_handler_malformed_entry_fails_only_itself(docs, manager):
    event = {
        "files": [
            {"fileBuffer": docs.b64(docs.build_png_bytes()), "filename": "good.png"},
            {"fileBuffer": docs.b64(docs.build_png_bytes()), "filename": 42},
            "not-an-object",
            {"fileBuffer": ["not", "a", "string"], "filename": "odd.png"},
        ]
    }

    out = await handler(event, manager)

    assert out["statusCode"] == 200
    results = json.loads(out["body"])["results"]
    assert [r["success"] for r in results] == [True, False, False, False]
    assert [r["filename"] for r in results] == ["good.png", "document", "document", "odd.png"]
    assert "filename" in results[1]["error"]
    assert "fileBuffer" in results[3]["error"]
    for r in results[1:]:
        assert r["extractedText"] is None
        assert r["error"].startswith("Invalid file entry")


@pytest.mark.asyncio
async def test_handler_files_not_a_list(manager, engine_factory):
    out = await handler({"files": {"fileBuffer": "aGk="}}, manager)

    assert out["statusCode"] == 500
    body = json.loads(out["body"])
    assert body["message"] == "Error processing files"
    assert body["results"] == []
    assert engine_factory.calls == 0
