PASSWORD = "Passw0rd!"


async def register(client, username: str, password: str = PASSWORD) -> dict:
    """Registers through the API and returns auth headers"""
    response = await client.post("/auth/register", json={"username": username, "password": password})
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['authToken']}"}


async def master_document_id(client, username: str, headers: dict) -> int:
    response = await client.get(f"/users/{username}/documents", headers=headers)
    assert response.status_code == 200, response.text
    return next(doc["id"] for doc in response.json()["documents"] if doc["isMaster"])


EDUCATION = {
    "school": "University of California,",
    "location": "Los Angeles",
    "startDate": "2025-01-01",
    "endDate": "2030-01-01",
    "degree": "Bachelor's of Science, Computer Science",
    "gpa": "4.0 / 4.0",
}

EXPERIENCE = {
    "title": "Software Engineer I",
    "organization": "Company 1",
    "location": "City 1, State 1, Country",
    "startDate": "2000-02-02",
}
