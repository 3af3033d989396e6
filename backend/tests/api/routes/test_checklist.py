from fastapi.testclient import TestClient

from tests.utils.test_utils import (
    as_user,
    assert_response_error,
    assert_response_success,
    create_test_checklist_request,
    create_test_order_request,
)


class TestChecklistAPI:
    """Test cases for the checklist API endpoints."""

    def test_submit_and_fetch_checklist(self, client: TestClient, seed):
        created = client.post(
            "/api/v1/orders/", json=create_test_order_request(seed), headers=as_user(seed.advisor_id)
        ).json()
        job_id = client.get(f"/api/v1/orders/{created['order_id']}").json()["jobs"][0]["id"]

        response = client.post("/api/v1/checklist/", json=create_test_checklist_request(job_id))
        assert_response_success(response)
        assert response.json()["message"] == "Checklist saved and job completed"

        again = client.post(
            "/api/v1/checklist/", json=create_test_checklist_request(job_id, steering_box="Regular")
        )
        assert again.json()["message"] == "Checklist updated and job completed"

        fetched = client.get(f"/api/v1/checklist/by-job/{job_id}")
        assert_response_success(fetched)
        assert fetched.json()["checklist"]["steering_box"] == "Regular"

        job = client.get(f"/api/v1/jobs/{job_id}").json()
        assert job["status_name"] == "Completed"

    def test_submit_incomplete_payload(self, client: TestClient, seed):
        response = client.post("/api/v1/checklist/", json={"job_id": 1})
        assert_response_error(response, 400)

    def test_missing_checklist(self, client: TestClient, seed):
        assert_response_error(client.get("/api/v1/checklist/by-job/999"), 404)
