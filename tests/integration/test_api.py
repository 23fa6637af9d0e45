"""Integration tests for the API endpoints."""

import pytest
from fastapi.testclient import TestClient
from people_finder.api.dependencies import get_directory
from people_finder.core.directory import PeopleDirectory
from people_finder.main import app
from people_finder.store.record_store import RecordStore


class TestAPI:
    """Integration tests for API endpoints."""
    
    @pytest.fixture
    def directory(self):
        """Directory over an in-memory store with sample records."""
        store = RecordStore()
        store.bulk_import([
            {
                "id": "alice",
                "name": "Alice Park",
                "notes": "met at a conference",
                "whereMet": "Seattle",
                "tags": ["work", "conference"],
                "createdAt": "2024-01-02T00:00:00Z",
            },
            {
                "id": "bob",
                "name": "Bob Stone",
                "notes": "plays chess",
                "whereMet": "Portland",
                "tags": ["gym"],
                "createdAt": "2024-01-01T00:00:00Z",
            },
        ])
        return PeopleDirectory(store)
    
    @pytest.fixture
    def client(self, directory):
        """Create a test client bound to the sample directory."""
        app.dependency_overrides[get_directory] = lambda: directory
        yield TestClient(app)
        app.dependency_overrides.clear()
    
    def test_root_endpoint(self, client):
        """Test the root endpoint."""
        response = client.get("/")
        assert response.status_code == 200
        
        data = response.json()
        assert data["name"] == "People Finder"
        assert data["version"] == "1.0.0"
        assert data["status"] == "running"
    
    def test_api_info_endpoint(self, client):
        """Test the API info endpoint."""
        response = client.get("/api")
        assert response.status_code == 200
        
        data = response.json()
        assert "endpoints" in data
        assert data["search"]["debounce_ms"] == 200
        assert data["search"]["min_match_length"] == 2
    
    def test_list_records(self, client):
        response = client.get("/api/v1/records")
        assert response.status_code == 200
        
        data = response.json()
        assert [r["id"] for r in data] == ["alice", "bob"]
        assert data[0]["whereMet"] == "Seattle"
    
    def test_create_record(self, client):
        """Test creating a record with comma-separated tags."""
        response = client.post("/api/v1/records", json={
            "name": " Carol King ",
            "notes": "neighbour",
            "whereMet": "Oslo",
            "whenMet": "2024-02-03",
            "tags": "friends, , neighbours"
        })
        assert response.status_code == 201
        
        data = response.json()
        assert data["id"]
        assert data["name"] == "Carol King"
        assert data["tags"] == ["friends", "neighbours"]
        assert data["whenMet"] == "2024-02-03"
        
        search = client.get("/api/v1/search", params={"q": "carol"}).json()
        assert [hit["record"]["id"] for hit in search["results"]] == [data["id"]]
    
    def test_create_record_requires_name(self, client):
        """Blank names are rejected."""
        response = client.post("/api/v1/records", json={"name": "   "})
        assert response.status_code == 422
        
        response = client.post("/api/v1/records", json={"notes": "no name"})
        assert response.status_code == 422
    
    def test_get_record(self, client):
        response = client.get("/api/v1/records/alice")
        assert response.status_code == 200
        assert response.json()["name"] == "Alice Park"
    
    def test_get_record_not_found(self, client):
        response = client.get("/api/v1/records/missing")
        assert response.status_code == 404
    
    def test_update_record(self, client):
        response = client.patch("/api/v1/records/bob", json={"notes": "sailing partner"})
        assert response.status_code == 200
        
        data = response.json()
        assert data["notes"] == "sailing partner"
        assert data["name"] == "Bob Stone"
    
    def test_update_record_not_found(self, client):
        response = client.patch("/api/v1/records/missing", json={"notes": "x"})
        assert response.status_code == 404
    
    def test_update_record_blank_name(self, client):
        response = client.patch("/api/v1/records/bob", json={"name": "  "})
        assert response.status_code == 422
    
    def test_delete_record(self, client):
        response = client.delete("/api/v1/records/bob")
        assert response.status_code == 200
        assert "deleted successfully" in response.json()["message"]
        
        search = client.get("/api/v1/search", params={"q": "bob"}).json()
        assert search["total_results"] == 0
    
    def test_delete_record_not_found(self, client):
        response = client.delete("/api/v1/records/missing")
        assert response.status_code == 404
    
    def test_search_fuzzy_match(self, client):
        """Test fuzzy search with highlights."""
        response = client.get("/api/v1/search", params={"q": "confrence"})
        assert response.status_code == 200
        
        data = response.json()
        assert data["searched"] is True
        assert data["total_results"] == 1
        
        hit = data["results"][0]
        assert hit["record"]["id"] == "alice"
        assert hit["score"] is not None
        assert {"field": "tags", "array_index": 1} in [
            {"field": m["field"], "array_index": m["array_index"]} for m in hit["matches"]
        ]
        assert hit["highlights"]["tags"][0] == [{"kind": "plain", "text": "work"}]
        assert hit["highlights"]["notes"] == [
            {"kind": "plain", "text": "met at a "},
            {"kind": "matched", "text": "conf"},
            {"kind": "plain", "text": "e"},
            {"kind": "matched", "text": "rence"},
        ]

    def test_search_span_fields_are_record_keys(self, client):
        """Span field names and highlight keys match the record JSON."""
        response = client.get("/api/v1/search", params={"q": "seattle"})
        assert response.status_code == 200

        hit = response.json()["results"][0]
        assert hit["record"]["id"] == "alice"
        assert [m["field"] for m in hit["matches"]] == ["whereMet"]
        for match in hit["matches"]:
            assert match["field"] in hit["record"]
            assert match["field"] in hit["highlights"]
        assert hit["highlights"]["whereMet"] == [{"kind": "matched", "text": "Seattle"}]

    def test_search_blank_lists_everything(self, client):
        """A blank query returns every record in listing order."""
        response = client.get("/api/v1/search", params={"q": "  "})
        assert response.status_code == 200
        
        data = response.json()
        assert data["searched"] is False
        assert [hit["record"]["id"] for hit in data["results"]] == ["alice", "bob"]
        assert all(hit["score"] is None for hit in data["results"])
    
    def test_search_no_match(self, client):
        data = client.get("/api/v1/search", params={"q": "qqqq"}).json()
        
        assert data["total_results"] == 0
        assert data["results"] == []
    
    def test_search_with_body(self, client):
        response = client.post("/api/v1/search", json={"query": "seatle"})
        assert response.status_code == 200
        assert response.json()["results"][0]["record"]["id"] == "alice"
    
    def test_search_query_too_long(self, client):
        response = client.get("/api/v1/search", params={"q": "x" * 201})
        assert response.status_code == 400
    
    def test_export(self, client):
        response = client.get("/api/v1/export")
        assert response.status_code == 200
        assert "people-export.json" in response.headers["content-disposition"]
        
        data = response.json()
        assert [r["id"] for r in data] == ["alice", "bob"]
        assert set(data[0]) == {"id", "name", "notes", "whereMet", "whenMet", "tags", "createdAt"}
    
    def test_import_merge(self, client):
        """Importing an export back keeps the same ids."""
        exported = client.get("/api/v1/export").json()
        
        response = client.post("/api/v1/import", json=exported)
        assert response.status_code == 200
        
        data = response.json()
        assert data["mode"] == "merge"
        assert data["imported"] == 2
        assert data["total_records"] == 2
    
    def test_import_new_ids(self, client):
        """newIds imports always add records."""
        for _ in range(2):
            response = client.post("/api/v1/import", params={"mode": "newIds"}, json=[{"name": "X"}])
            assert response.status_code == 200
        
        records = client.get("/api/v1/records").json()
        x_ids = [r["id"] for r in records if r["name"] == "X"]
        assert len(x_ids) == 2
        assert len(set(x_ids)) == 2
    
    def test_import_rejects_non_array(self, client):
        """Only JSON arrays are accepted and nothing is written otherwise."""
        response = client.post("/api/v1/import", json={"name": "X"})
        assert response.status_code == 400
        
        response = client.post("/api/v1/import", json=[{"name": "ok"}, 5])
        assert response.status_code == 400
        
        assert len(client.get("/api/v1/records").json()) == 2
    
    def test_import_invalid_mode(self, client):
        response = client.post("/api/v1/import", params={"mode": "replace"}, json=[])
        assert response.status_code == 422
    
    def test_health_check(self, client):
        """Test health check endpoint."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        
        data = response.json()
        assert data["status"] == "healthy"
        assert data["total_records"] == 2
        assert "dependencies" in data
    
    def test_metrics_endpoint(self, client):
        """Test metrics endpoint."""
        client.get("/api/v1/search", params={"q": "alice"})
        
        response = client.get("/api/v1/metrics")
        assert response.status_code == 200
        
        data = response.json()
        assert data["total_queries"] == 1
        assert data["queries_with_hits"] == 1
        assert data["indexed_records"] == 2
        assert data["memory_usage_mb"] > 0
