"""Tests API page headers + onglet admin."""
from conftest import ADMIN, create_page


class TestPageHeadersApi:
    def test_missing_header_is_404(self, client):
        assert client.get("/api/page-headers/courses").status_code == 404

    def test_upsert_then_read(self, client):
        r = client.put("/api/admin/page-headers/courses", headers=ADMIN,
                       json={"title": "Corsi", "imageUrl": "/h/corsi.jpg", "subtitle": "Per tutti"})
        assert r.status_code == 200
        header = client.get("/api/page-headers/courses").json()
        assert header["title"] == "Corsi"
        assert header["paddingTop"] == "py-16"
        assert header["paddingBottom"] == "py-24"
        assert header["minHeight"] == "min-h-96"

    def test_upsert_overwrites(self, client):
        client.put("/api/admin/page-headers/home", headers=ADMIN, json={"title": "Uno"})
        client.put("/api/admin/page-headers/home", headers=ADMIN, json={"title": "Due", "paddingTop": "py-8"})
        headers = client.get("/api/page-headers").json()
        assert len(headers) == 1
        assert headers[0]["title"] == "Due"
        assert headers[0]["paddingTop"] == "py-8"

    def test_upsert_requires_admin(self, client):
        r = client.put("/api/admin/page-headers/home", json={"title": "X"})
        assert r.status_code == 403

    def test_token_in_query_string(self, client):
        r = client.put("/api/admin/page-headers/home?token=test-token", json={"title": "X"})
        assert r.status_code == 200

    def test_blank_title_rejected(self, client):
        r = client.put("/api/admin/page-headers/home", headers=ADMIN, json={"title": "  "})
        assert r.status_code == 400

    def test_delete_is_204_even_when_absent(self, client):
        client.put("/api/admin/page-headers/community", headers=ADMIN, json={"title": "Community"})
        assert client.delete("/api/admin/page-headers/community", headers=ADMIN).status_code == 204
        assert client.delete("/api/admin/page-headers/community", headers=ADMIN).status_code == 204
        assert client.get("/api/page-headers/community").status_code == 404


class TestPageHeadersAdminPage:
    def test_admin_page_requires_token(self, client):
        r = client.get("/admin/page-headers", headers={"accept": "text/html"}, follow_redirects=False)
        assert r.status_code == 403
        assert client.get("/admin/page-headers?token=test-token").status_code == 200

    def test_admin_root_redirects_to_headers_tab(self, client):
        r = client.get("/admin", follow_redirects=False)
        assert r.status_code == 303
        assert r.headers["location"] == "/admin/page-headers"

    def test_default_selection_is_courses(self, client):
        r = client.get("/admin/page-headers", headers=ADMIN)
        assert r.status_code == 200
        assert '<option value="courses" selected>Corsi</option>' in r.text

    def test_custom_page_defaults(self, client):
        create_page(client, slug="estate", title="Estate", headerSubtitle="Camp estivo")
        client.delete("/api/admin/page-headers/estate", headers=ADMIN)
        r = client.get("/admin/page-headers?page=estate", headers=ADMIN)
        assert "Estate (custom)" in r.text
        assert 'value="Estate"' in r.text
        assert "Camp estivo" in r.text

