import pytest

@pytest.fixture
def catalogue(client):
    ids = {}
    for name, active in (("Databases", True), ("Algorithms", True), ("Archived", False)):
        r = client.post("/api/subjects", json={"name": name, "description": f"{name} subject", "icon": "book", "isActive": active})
        assert r.status_code == 201
        ids[name] = r.json()["id"]
    for name, subject, active in (("Sorting", "Algorithms", True), ("Graphs", "Algorithms", True),
                                  ("Heuristics", "Algorithms", False), ("Joins", "Databases", True)):
        r = client.post("/api/topics", json={"name": name, "description": name, "subjectId": ids[subject], "isActive": active})
        assert r.status_code == 201
        ids[name] = r.json()["id"]
    return ids

def test_create_subject_defaults_to_active(client):
    r = client.post("/api/subjects", json={"name": "Operating Systems", "description": "Processes", "icon": "cpu"})
    assert r.status_code == 201
    body = r.json()
    assert body["isActive"] is True
    assert body["name"] == "Operating Systems"

def test_create_subject_rejects_non_boolean_active(client):
    r = client.post("/api/subjects", json={"name": "Compilers", "isActive": "false"})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to create subject"}
    assert client.get("/api/subjects").json() == []
    r = client.post("/api/subjects", json={"name": "Compilers", "isActive": False})
    assert r.status_code == 201
    assert r.json()["isActive"] is False

def test_create_subject_without_name_fails(client):
    r = client.post("/api/subjects", json={"description": "No name"})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to create subject"}

def test_subjects_are_alphabetical(client, catalogue):
    names = [s["name"] for s in client.get("/api/subjects").json()]
    assert names == ["Algorithms", "Archived", "Databases"]

def test_subjects_active_filter(client, catalogue):
    names = [s["name"] for s in client.get("/api/subjects?active=true").json()]
    assert names == ["Algorithms", "Databases"]
    # anything other than "true" means no filter
    assert len(client.get("/api/subjects?active=1").json()) == 3

def test_subjects_include_only_active_topics(client, catalogue):
    body = client.get("/api/subjects?includeTopics=true").json()
    algorithms = next(s for s in body if s["name"] == "Algorithms")
    assert [t["name"] for t in algorithms["topics"]] == ["Graphs", "Sorting"]
    assert "topics" not in client.get("/api/subjects").json()[0]

def test_create_topic_defaults_and_nests_subject(client, catalogue):
    r = client.post("/api/topics", json={"name": "Indexes", "description": "B-trees", "subjectId": catalogue["Databases"]})
    assert r.status_code == 201
    body = r.json()
    assert body["difficulty"] == "MEDIUM"
    assert body["isActive"] is True
    assert body["subject"]["id"] == catalogue["Databases"]
    assert body["subject"]["description"] == "Databases subject"

def test_create_topic_with_unknown_subject_fails(client):
    r = client.post("/api/topics", json={"name": "Orphan", "description": "x", "subjectId": "missing"})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to create topic"}

def test_create_topic_rejects_non_boolean_active(client, catalogue):
    r = client.post("/api/topics", json={"name": "Parsing", "subjectId": catalogue["Algorithms"], "isActive": "false"})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to create topic"}
    r = client.post("/api/topics", json={"name": "Parsing", "subjectId": catalogue["Algorithms"], "isActive": False})
    assert r.status_code == 201
    assert r.json()["isActive"] is False

def test_topics_list_filters(client, catalogue):
    all_topics = client.get("/api/topics").json()
    assert [t["name"] for t in all_topics] == ["Graphs", "Heuristics", "Joins", "Sorting"]
    assert all_topics[0]["subject"] == {"id": catalogue["Algorithms"], "name": "Algorithms", "icon": "book"}

    algorithms = client.get(f"/api/topics?subjectId={catalogue['Algorithms']}&active=true").json()
    assert [t["name"] for t in algorithms] == ["Graphs", "Sorting"]
