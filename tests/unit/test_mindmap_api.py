"""Unit tests for the mindmap page and its data endpoints."""

import asyncio


def node_ids(graph: dict) -> set[str]:
    return {node["id"] for node in graph["nodes"]}


class TestMindmapPage:
    """Tests for the HTML page and favicon."""

    def test_index(self, api_client) -> None:
        for path in ("/", "/mindmap"):
            response = api_client.get(path)
            assert response.status_code == 200
            assert response.headers["content-type"].startswith("text/html")
            assert "Learnmap" in response.text
            assert "/mindmap/data" in response.text

    def test_favicon(self, api_client) -> None:
        response = api_client.get("/favicon.ico")
        assert response.status_code == 200
        assert response.headers["content-type"] == "image/svg+xml"


class TestMindmapData:
    """Tests for /mindmap/data, /mindmap/click and /mindmap/reload."""

    def test_first_load_reads_store(self, api_client, mock_store) -> None:
        response = api_client.get("/mindmap/data")
        assert response.status_code == 200
        graph = response.json()
        assert node_ids(graph) == {"DevOps", "Backend"}
        assert graph["width"] == 1200
        assert graph["height"] == 800
        mock_store.get_entries.assert_awaited_once()

        api_client.get("/mindmap/data")
        mock_store.get_entries.assert_awaited_once()

    def test_nodes_carry_layout_and_style(self, api_client) -> None:
        graph = api_client.get("/mindmap/data").json()
        for node in graph["nodes"]:
            assert 0 <= node["x"] <= 1200
            assert 0 <= node["y"] <= 800
            assert node["color"].startswith("#")
            assert node["size"] == 50

    def test_click_expands_and_collapses(self, api_client) -> None:
        api_client.get("/mindmap/data")

        response = api_client.post("/mindmap/click", json={"node_id": "DevOps"})
        assert response.status_code == 200
        graph = response.json()
        assert {"DevOps-Containers", "DevOps-Orchestration"} <= node_ids(graph)
        assert {(l["source"], l["target"]) for l in graph["links"]} == {
            ("DevOps", "DevOps-Containers"),
            ("DevOps", "DevOps-Orchestration"),
        }

        graph = api_client.post(
            "/mindmap/click", json={"node_id": "DevOps-Containers"}
        ).json()
        assert "DevOps-Containers-Podman" in node_ids(graph)

        graph = api_client.post("/mindmap/click", json={"node_id": "DevOps"}).json()
        assert node_ids(graph) == {"DevOps", "Backend"}

    def test_click_unknown_node(self, api_client) -> None:
        api_client.get("/mindmap/data")
        response = api_client.post("/mindmap/click", json={"node_id": "missing"})
        assert response.status_code == 404
        assert response.json()["detail"] == "Node not found"

    def test_reload_closes_everything(self, api_client) -> None:
        api_client.get("/mindmap/data")
        api_client.post("/mindmap/click", json={"node_id": "Backend"})

        graph = api_client.post("/mindmap/reload").json()
        assert node_ids(graph) == {"DevOps", "Backend"}

    def test_reload_keeps_path_open(self, api_client) -> None:
        graph = api_client.post(
            "/mindmap/reload",
            json={"main_topic": "Backend", "sub_topic": "API"},
        ).json()
        assert {"Backend-API", "Backend-API-GraphQL Basics"} <= node_ids(graph)

    def test_layout_runs_off_the_event_loop(self, api_client, monkeypatch) -> None:
        calls = []
        to_thread = asyncio.to_thread

        async def recording_to_thread(func, *args, **kwargs):
            calls.append(func.__name__)
            return await to_thread(func, *args, **kwargs)

        monkeypatch.setattr(asyncio, "to_thread", recording_to_thread)

        api_client.get("/mindmap/data")
        api_client.post("/mindmap/click", json={"node_id": "DevOps"})
        api_client.post("/mindmap/reload")

        assert calls.count("load") == 2
        assert "click" in calls
        assert calls.count("visible_graph") == 3


class TestNodeDetail:
    """Tests for /mindmap/nodes/detail."""

    def test_title_detail(self, api_client) -> None:
        api_client.get("/mindmap/data")
        response = api_client.get(
            "/mindmap/nodes/detail",
            params={"node_id": "DevOps-Containers-Docker Basics"},
        )
        assert response.status_code == 200
        detail = response.json()
        assert detail["entry_id"] == "e1"
        assert detail["main_topic"] == "DevOps"
        assert detail["sub_topic"] == "Containers"
        assert detail["description"] == "Einführung in Docker-Container"

    def test_non_title_detail(self, api_client) -> None:
        api_client.get("/mindmap/data")
        response = api_client.get("/mindmap/nodes/detail", params={"node_id": "DevOps"})
        assert response.status_code == 404
        assert response.json()["detail"] == "Title node not found"
