"""
Integration Tests — Data Export / Import Endpoints
"""
import io
import zipfile

from fastapi.testclient import TestClient

from referencedata.utils.file_helper import file_map_to_zip


class TestExport:

    def test_export_returns_zip_attachment(self, client: TestClient, reference_data):
        resp = client.get("/api/v1/export-data", params={"format": "csv", "data": "productCategory,supportedProgram"})
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/zip"
        assert resp.headers["content-disposition"] == "attachment;filename=OLMIS_configuration_data.zip"

        with zipfile.ZipFile(io.BytesIO(resp.content)) as archive:
            assert sorted(archive.namelist()) == ["productCategory.csv", "supportedProgram.csv"]
            assert archive.read("productCategory.csv").decode().splitlines() == [
                "code,displayName,displayOrder",
                "vaccines,Vaccines,1",
            ]

    def test_export_without_parameters_returns_400(self, client: TestClient):
        resp = client.get("/api/v1/export-data")
        assert resp.status_code == 400
        assert resp.json()["error"]["message_key"] == "referenceData.error.export.lackParameters"

    def test_export_with_invalid_format_returns_400(self, client: TestClient):
        resp = client.get("/api/v1/export-data", params={"format": "xlsx", "data": "orderable"})
        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "EXPORT_INVALID_FORMAT"


class TestImport:

    def test_import_product_categories(self, client: TestClient):
        archive = file_map_to_zip({"productCategory.csv": b"code,displayName,displayOrder\nsyringes,Syringes,4\n"})

        resp = client.post(
            "/api/v1/import-data",
            files={"file": ("config.zip", archive, "application/zip")},
        )
        assert resp.status_code == 200
        assert resp.json()["files"] == [
            {"file_name": "productCategory.csv", "processed": 1, "created": 1, "updated": 0},
        ]

        categories = client.get("/api/v1/product-categories").json()
        assert [c["code"] for c in categories["items"]] == ["syringes"]

    def test_import_rejects_non_zip_upload(self, client: TestClient):
        resp = client.post("/api/v1/import-data", files={"file": ("config.csv", b"code\n", "text/csv")})
        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "IMPORT_INVALID_FILE"
