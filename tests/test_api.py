import base64

from movie_catalog.models import Movie
from movie_catalog.sources import SqlMovieImageSource


def test_create_and_export_movie(client) -> None:
    studio = client.post("/api/studios", json={"name": "studio"}).json()
    response = client.post(
        "/api/movies",
        json={
            "name": "testMovie",
            "rating": 5,
            "studio_id": studio["id"],
            "front_image": base64.b64encode(b"frontImageBytes").decode("ascii"),
        },
    )
    assert response.status_code == 200
    movie_id = response.json()["id"]

    response = client.get(f"/api/movies/{movie_id}/export")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "testMovie"
    assert data["rating"] == 5
    assert data["studio"] == "studio"
    assert data["front_image"] == "ZnJvbnRJbWFnZUJ5dGVz"
    assert "back_image" not in data
    assert data["created_at"].endswith("Z")


def test_export_missing_movie(client) -> None:
    assert client.get("/api/movies/999/export").status_code == 404


def test_export_lookup_failure(client, monkeypatch) -> None:
    movie_id = client.post("/api/movies", json={"name": "testMovie"}).json()["id"]

    def broken(self, movie_id):
        raise RuntimeError("error getting image")

    monkeypatch.setattr(SqlMovieImageSource, "get_back_image", broken)
    response = client.get(f"/api/movies/{movie_id}/export")
    assert response.status_code == 502
    assert response.json()["detail"] == "error getting movie back image: error getting image"


def test_import_endpoint(client) -> None:
    document = {
        "name": "imported",
        "studio": "new studio",
        "created_at": "2001-01-01T00:00:00Z",
        "updated_at": "2002-01-01T00:00:00Z",
    }
    response = client.post("/api/movies/import", json=document)
    assert response.status_code == 400

    response = client.post("/api/movies/import?missing_studio=create", json=document)
    assert response.status_code == 200
    assert response.json()["name"] == "imported"
    studios = client.get("/api/studios").json()
    assert [studio["name"] for studio in studios] == ["new studio"]


def test_delete_movie_removes_images(client, db) -> None:
    movie_id = client.post(
        "/api/movies",
        json={"name": "testMovie", "back_image": base64.b64encode(b"back").decode("ascii")},
    ).json()["id"]

    assert client.delete(f"/api/movies/{movie_id}").json() == {"deleted": movie_id}
    assert client.delete(f"/api/movies/{movie_id}").status_code == 404
    assert db.get(Movie, movie_id) is None
    assert SqlMovieImageSource(db).get_back_image(movie_id) is None


def test_create_movie_rejects_invalid_image(client) -> None:
    response = client.post("/api/movies", json={"name": "bad", "front_image": "%%%"})
    assert response.status_code == 400


def test_import_endpoint_without_timestamps(client) -> None:
    response = client.post("/api/movies/import", json={"name": "no dates"})
    assert response.status_code == 200
    assert response.json()["name"] == "no dates"


def test_import_endpoint_storage_error(client) -> None:
    response = client.post("/api/movies/import", json={"name": "huge", "rating": 2**70})
    assert response.status_code == 400
    assert "huge" in response.json()["detail"]
