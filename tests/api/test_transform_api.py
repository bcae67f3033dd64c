"""
API Integration Tests for Transform Endpoints
"""

import pytest


class TestTransformAPI:
    """Integration tests for transform API endpoints"""

    @pytest.fixture
    def stored_png(self, api_storage, image_bytes):
        """Seed a 1200x600 PNG and return its key"""
        api_storage.put("bucket", "photos/cat.png", image_bytes(1200, 600), "image/png")
        return "photos/cat.png"

    def test_transform(self, client, api_storage, stored_png):
        """Test transform with kind in the body"""
        response = client.post(
            "/api/transform", json={"container": "bucket", "key": stored_png, "kind": "resize"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "success"
        assert data["kind"] == "resize"
        assert data["destination_key"] == "resized/photos/cat.png"
        assert data["diagnostics"]["new_width"] == 800
        assert data["diagnostics"]["new_height"] == 400
        assert data["error"] is None
        assert api_storage.store_calls == [("bucket", "resized/photos/cat.png")]

    @pytest.mark.parametrize(
        "kind,prefix", [("grayscale", "grayscale/"), ("resize", "resized/"), ("rotate", "rotated/")]
    )
    def test_transform_kind_in_path(self, client, stored_png, kind, prefix):
        response = client.post(
            f"/api/transform/{kind}", json={"container": "bucket", "key": stored_png}
        )

        assert response.status_code == 200
        assert response.json()["destination_key"] == prefix + stored_png

    def test_rotate_dimensions(self, client, stored_png, api_storage, open_image):
        response = client.post(
            "/api/transform/rotate", json={"container": "bucket", "key": stored_png}
        )

        assert response.status_code == 200
        stored = api_storage.fetch("bucket", "rotated/photos/cat.png")
        assert open_image(stored.body).size == (600, 1200)

    @pytest.mark.parametrize(
        "payload",
        [
            {"container": "bucket", "key": "photos/cat.png"},
            {"container": "bucket", "kind": "rotate"},
            {"container": "bucket", "key": "photos/cat.png", "kind": "sepia"},
            {"container": " ", "key": "photos/cat.png", "kind": "rotate"},
        ],
    )
    def test_invalid_request(self, client, api_storage, payload):
        response = client.post("/api/transform", json=payload)

        assert response.status_code == 400
        data = response.json()
        assert data["status"] == "failed"
        assert data["error"]["code"] == "invalid_request"
        assert data["error"]["stage"] == "validate"
        assert api_storage.store_calls == []

    def test_unknown_kind_in_path(self, client):
        response = client.post(
            "/api/transform/sepia", json={"container": "bucket", "key": "photos/cat.png"}
        )

        assert response.status_code == 400

    def test_not_found(self, client, api_storage):
        response = client.post(
            "/api/transform/rotate", json={"container": "bucket", "key": "missing.png"}
        )

        assert response.status_code == 404
        data = response.json()
        assert data["error"]["code"] == "not_found"
        assert data["error"]["stage"] == "fetch"
        assert data["destination_key"] is None
        assert api_storage.store_calls == []

    def test_access_denied(self, client, api_storage, image_bytes):
        api_storage.put("private", "cat.png", image_bytes(10, 10), "image/png")

        response = client.post(
            "/api/transform/rotate", json={"container": "private", "key": "cat.png"}
        )

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "access_denied"

    def test_unknown_format(self, client, api_storage, image_bytes):
        api_storage.put("bucket", "noext", image_bytes(10, 10))

        response = client.post(
            "/api/transform/grayscale", json={"container": "bucket", "key": "noext"}
        )

        assert response.status_code == 415
        assert response.json()["error"]["code"] == "unknown_format"

    def test_decode_failed(self, client, api_storage):
        api_storage.put("bucket", "bad.png", b"garbage", "image/png")

        response = client.post(
            "/api/transform/grayscale", json={"container": "bucket", "key": "bad.png"}
        )

        assert response.status_code == 422
        data = response.json()
        assert data["error"]["code"] == "decode_failed"
        assert data["diagnostics"]["input_size"] == 7
        assert api_storage.store_calls == []


class TestServiceEndpoints:
    """Test root and health endpoints"""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "running"
        assert data["transforms"] == ["grayscale", "resize", "rotate"]

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["services"]["transform_service"] is True
