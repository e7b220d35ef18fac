import sys
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from floworx import main


class WorkflowApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(main.app)
        self.payload = {
            "business_data": {
                "user_id": "demo_hottub",
                "company_name": "The Hot Tub Man Ltd",
                "industry": "hot-tub-spa",
                "business_email": "service@thehotubman.com",
            },
            "custom_managers": ["Hailey", "Jillian", "Stacie", "Aaron"],
            "custom_suppliers": ["Aqua Spa Pool Supply", "Strong Spas"],
            "phone_system": "RingCentral",
        }

    def test_health(self):
        response = self.client.get("/api/health")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ok")

    def test_generate_workflow(self):
        response = self.client.post("/api/workflows/generate", json=self.payload)

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["summary"]["name"], "The Hot Tub Man Ltd - Email Automation Workflow")
        self.assertEqual(body["summary"]["node_roles"]["manager"], 4)
        self.assertEqual(body["summary"]["node_roles"]["supplier"], 2)
        self.assertEqual(body["summary"]["node_roles"]["trigger"], 1)
        self.assertEqual(body["summary"]["node_roles"]["ai"], 1)
        self.assertEqual(body["trigger_filter"], "in:inbox -(from:(*@thehotubman.com))")
        self.assertTrue(body["system_message_preview"].startswith("You are an expert email processing"))
        self.assertLessEqual(len(body["system_message_preview"]), 200)

        workflow = body["workflow"]
        self.assertEqual(workflow["meta"]["customManagers"], self.payload["custom_managers"])
        self.assertEqual(len(workflow["nodes"]), body["summary"]["total_nodes"])

    def test_generate_reports_truncation(self):
        self.payload["custom_managers"] = [f"M{i}" for i in range(8)]
        self.payload["custom_suppliers"] = [f"S{i}" for i in range(12)]

        body = self.client.post("/api/workflows/generate", json=self.payload).json()

        self.assertEqual(body["summary"]["managers_included"], "5 of 8")
        self.assertEqual(body["summary"]["suppliers_included"], "10 of 12")
        self.assertEqual(len(body["workflow"]["meta"]["customSuppliers"]), 10)

    def test_generate_requires_tenant_identifiers(self):
        response = self.client.post("/api/workflows/generate", json={"business_data": {"user_id": "u1"}})
        self.assertEqual(response.status_code, 400)
        self.assertIn("company_name", response.json()["detail"])

        response = self.client.post("/api/workflows/generate", json={})
        self.assertEqual(response.status_code, 400)

    def test_sample_businesses(self):
        body = self.client.get("/api/workflows/sample-businesses").json()

        self.assertEqual(body["industries"], ["hot-tub-spa", "hvac", "plumbing", "landscaping"])
        self.assertEqual(body["samples"]["hvac"]["business_data"]["company_name"], "ABC HVAC Services")

    def test_quick_generate(self):
        response = self.client.post("/api/workflows/quick-generate/plumbing")

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["summary"]["name"], "Quick Fix Plumbing - Email Automation Workflow")
        self.assertEqual(body["summary"]["managers_included"], "2 of 2")
        self.assertIn("plumbing service business", body["workflow"]["nodes"][1]["parameters"]["options"]["systemMessage"])

    def test_quick_generate_unknown_industry(self):
        response = self.client.post("/api/workflows/quick-generate/bakery")

        self.assertEqual(response.status_code, 400)
        self.assertIn("not supported", response.json()["detail"])


if __name__ == "__main__":
    unittest.main()
