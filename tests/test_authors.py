"""
Tests for Authors API Endpoints

Tests for /api/authors endpoints.
"""

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from bookshelf.models import Author, Book


class TestListAuthors:
    """Tests for GET /api/authors endpoint."""

    def test_list_authors_empty(self, client: TestClient):
        response = client.get("/api/authors")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == []

    def test_list_authors_with_books(self, client: TestClient, sample_book: Book):
        response = client.get("/api/authors")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert len(data) == 1
        author = data[0]
        assert author["firstName"] == "Ursula"
        assert author["lastName"] == "Le Guin"
        assert author["books"] == [
            {
                "id": sample_book.id,
                "title": "The Dispossessed",
                "coverText": "An ambiguous utopia.",
            }
        ]
        assert author["_links"] == {"self": {"href": f"/api/authors/{author['id']}"}}

    def test_list_authors_field_order(self, client: TestClient, sample_author: Author):
        response = client.get("/api/authors")

        assert list(response.json()[0].keys()) == ["id", "firstName", "lastName", "books", "_links"]

    def test_list_authors_pagination(self, client: TestClient, db_session: Session):
        db_session.add_all(
            [Author(first_name=f"First {i}", last_name=f"Last {i}") for i in range(5)]
        )
        db_session.commit()

        page1 = client.get("/api/authors").json()
        page2 = client.get("/api/authors?page=2").json()
        page3 = client.get("/api/authors?page=3").json()

        assert [a["firstName"] for a in page1] == ["First 0", "First 1", "First 2"]
        assert [a["firstName"] for a in page2] == ["First 3", "First 4"]
        assert page3 == []

    def test_list_authors_custom_limit(self, client: TestClient, db_session: Session):
        db_session.add_all(
            [Author(first_name=f"First {i}", last_name=f"Last {i}") for i in range(5)]
        )
        db_session.commit()

        response = client.get("/api/authors?page=2&limit=2")

        assert [a["firstName"] for a in response.json()] == ["First 2", "First 3"]

    def test_list_authors_invalid_page(self, client: TestClient):
        assert client.get("/api/authors?page=0").status_code == 422
        assert client.get("/api/authors?limit=0").status_code == 422

    def test_list_authors_has_no_admin_links(
        self,
        client: TestClient,
        sample_author: Author,
        admin_headers: dict,
    ):
        """Cached lists are shared by every caller, so only self is linked."""
        response = client.get("/api/authors", headers=admin_headers)

        assert set(response.json()[0]["_links"]) == {"self"}


class TestGetAuthor:
    """Tests for GET /api/authors/{author_id} endpoint."""

    def test_get_author_success(self, client: TestClient, sample_book: Book):
        author_id = sample_book.author_id
        response = client.get(f"/api/authors/{author_id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["id"] == author_id
        assert data["firstName"] == "Ursula"
        assert data["books"][0]["title"] == "The Dispossessed"
        assert "comment" not in data["books"][0]
        assert "author" not in data["books"][0]

    def test_get_author_not_found(self, client: TestClient):
        response = client.get("/api/authors/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"detail": "Author with id 99999 not found"}

    def test_get_author_links_anonymous(self, client: TestClient, sample_author: Author):
        response = client.get(f"/api/authors/{sample_author.id}")

        assert response.json()["_links"] == {
            "self": {"href": f"/api/authors/{sample_author.id}"}
        }

    def test_get_author_links_admin(
        self,
        client: TestClient,
        sample_author: Author,
        admin_headers: dict,
    ):
        response = client.get(f"/api/authors/{sample_author.id}", headers=admin_headers)

        links = response.json()["_links"]
        assert set(links) == {"self", "update", "delete"}
        assert links["delete"]["href"] == f"/api/authors/{sample_author.id}"

    def test_get_author_links_regular_user(
        self,
        client: TestClient,
        sample_author: Author,
        user_headers: dict,
    ):
        response = client.get(f"/api/authors/{sample_author.id}", headers=user_headers)

        assert set(response.json()["_links"]) == {"self"}


class TestCreateAuthor:
    """Tests for POST /api/authors endpoint."""

    def test_create_author(self, client: TestClient, db_session: Session, admin_headers: dict):
        response = client.post(
            "/api/authors",
            json={"firstName": "Ursula", "lastName": "Le Guin"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["firstName"] == "Ursula"
        assert data["lastName"] == "Le Guin"
        assert data["books"] == []
        assert response.headers["location"].endswith(f"/api/authors/{data['id']}")
        assert set(data["_links"]) == {"self", "update", "delete"}
        assert db_session.get(Author, data["id"]) is not None

    def test_create_author_location_resolves(self, client: TestClient, admin_headers: dict):
        response = client.post(
            "/api/authors",
            json={"firstName": "Frank", "lastName": "Herbert"},
            headers=admin_headers,
        )

        shown = client.get(response.headers["location"])
        assert shown.status_code == status.HTTP_200_OK
        assert shown.json()["lastName"] == "Herbert"

    def test_create_author_name_too_short(self, client: TestClient, admin_headers: dict):
        response = client.post(
            "/api/authors",
            json={"firstName": "Al", "lastName": "Le Guin"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        errors = response.json()
        assert [e["field"] for e in errors] == ["firstName"]
        assert "3" in errors[0]["message"]

    def test_create_author_name_too_long(self, client: TestClient, admin_headers: dict):
        response = client.post(
            "/api/authors",
            json={"firstName": "Ursula", "lastName": "x" * 51},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()[0]["field"] == "lastName"

    def test_create_author_reports_every_violation(self, client: TestClient, admin_headers: dict):
        response = client.post("/api/authors", json={"firstName": "Al"}, headers=admin_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        fields = {e["field"] for e in response.json()}
        assert fields == {"firstName", "lastName"}

    def test_create_author_body_not_object(self, client: TestClient, admin_headers: dict):
        response = client.post("/api/authors", json=["Ursula"], headers=admin_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()[0]["field"] == "body"

    def test_create_author_invalid_leaves_no_row(
        self,
        client: TestClient,
        db_session: Session,
        admin_headers: dict,
    ):
        client.post(
            "/api/authors",
            json={"firstName": "Al", "lastName": "Bo"},
            headers=admin_headers,
        )

        assert db_session.query(Author).count() == 0


class TestUpdateAuthor:
    """Tests for PUT /api/authors/{author_id} endpoint."""

    def test_update_author(self, client: TestClient, sample_author: Author, admin_headers: dict):
        response = client.put(
            f"/api/authors/{sample_author.id}",
            json={"firstName": "Ursula K.", "lastName": "Le Guin"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert response.content == b""
        assert sample_author.first_name == "Ursula K."

    def test_update_author_partial_body_keeps_other_fields(
        self,
        client: TestClient,
        sample_author: Author,
        admin_headers: dict,
    ):
        response = client.put(
            f"/api/authors/{sample_author.id}",
            json={"lastName": "LeGuin"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        shown = client.get(f"/api/authors/{sample_author.id}").json()
        assert shown["firstName"] == "Ursula"
        assert shown["lastName"] == "LeGuin"

    def test_update_author_invalid_changes_nothing(
        self,
        client: TestClient,
        sample_author: Author,
        admin_headers: dict,
    ):
        response = client.put(
            f"/api/authors/{sample_author.id}",
            json={"firstName": "Ursula K.", "lastName": "LG"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert [e["field"] for e in response.json()] == ["lastName"]
        assert sample_author.first_name == "Ursula"
        assert sample_author.last_name == "Le Guin"

    def test_update_author_not_found(self, client: TestClient, admin_headers: dict):
        response = client.put(
            "/api/authors/99999",
            json={"firstName": "Nobody"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestDeleteAuthor:
    """Tests for DELETE /api/authors/{author_id} endpoint."""

    def test_delete_author(self, client: TestClient, sample_author: Author, admin_headers: dict):
        response = client.delete(f"/api/authors/{sample_author.id}", headers=admin_headers)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert client.get(f"/api/authors/{sample_author.id}").status_code == 404

    def test_delete_author_deletes_books(
        self,
        client: TestClient,
        sample_book: Book,
        admin_headers: dict,
    ):
        book_id = sample_book.id

        response = client.delete(f"/api/authors/{sample_book.author_id}", headers=admin_headers)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert client.get(f"/api/books/{book_id}").status_code == 404

    def test_delete_author_keeps_other_books(
        self,
        client: TestClient,
        db_session: Session,
        sample_book: Book,
        second_author: Author,
        admin_headers: dict,
    ):
        other = Book(title="Dune", author=second_author)
        db_session.add(other)
        db_session.commit()

        client.delete(f"/api/authors/{sample_book.author_id}", headers=admin_headers)

        assert client.get(f"/api/books/{other.id}").status_code == 200

    def test_delete_author_not_found(self, client: TestClient, admin_headers: dict):
        response = client.delete("/api/authors/99999", headers=admin_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
