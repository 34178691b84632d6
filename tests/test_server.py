import unittest

import server


class ServerApiTests(unittest.TestCase):
    def setUp(self):
        server.app.config["TESTING"] = True
        self.client = server.app.test_client()

    def _new_recorder(self, color="white"):
        resp = self.client.post("/api/recorders", json={"color": color})
        self.assertEqual(resp.status_code, 201)
        return resp.get_json()

    def test_recorder_session_flow(self):
        state = self._new_recorder()
        rid = state["recorder_id"]
        self.assertEqual(state["color"], "white")
        self.assertEqual(state["moves"], [])

        resp = self.client.post(f"/api/recorders/{rid}/move", json={"from": "e2", "to": "e4"})
        self.assertEqual(resp.get_json()["san"], "e4")

        resp = self.client.post(f"/api/recorders/{rid}/select", json={"square": "e4"})
        self.assertEqual(resp.get_json()["destinations"], ["d5", "e5", "f5"])

        resp = self.client.post(f"/api/recorders/{rid}/move", json={"from": "e4", "to": "d5"})
        body = resp.get_json()
        self.assertEqual(body["san"], "exd5")
        self.assertEqual(body["moves"], ["e4", "exd5"])

        resp = self.client.post(f"/api/recorders/{rid}/move", json={"from": "d5", "to": "d3"})
        self.assertEqual(resp.status_code, 409)

        resp = self.client.get(f"/api/recorders/{rid}/moves.txt")
        self.assertEqual(resp.get_data(as_text=True), "e4\nexd5")
        self.assertIn("white.txt", resp.headers["Content-Disposition"])

        resp = self.client.post(f"/api/recorders/{rid}/undo")
        self.assertEqual(resp.get_json()["removed"], "exd5")

        resp = self.client.post(f"/api/recorders/{rid}/reset", json={"color": "black"})
        body = resp.get_json()
        self.assertEqual(body["color"], "black")
        self.assertEqual(body["moves"], [])

    def test_bad_input(self):
        self.assertEqual(self.client.post("/api/recorders", json={"color": "green"}).status_code, 400)
        rid = self._new_recorder()["recorder_id"]
        resp = self.client.post(f"/api/recorders/{rid}/select", json={"square": "z9"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.client.get("/api/recorders/missing").status_code, 404)

    def test_simulation(self):
        resp = self.client.post(
            "/api/simulations",
            json={"white": "e4\n\nKe2??\n", "black": ["e5", "Nc6"], "policy": "strict",
                  "white_name": "alice.txt"},
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.get_json()
        self.assertEqual(body["policy"], "strict")
        self.assertEqual(len(body["steps"]), 5)
        self.assertTrue(body["steps"][3]["is_illegal_attempt"])
        self.assertIn("Nc6", body["pgn"])
        self.assertIn('[White "alice.txt"]', body["pgn"])
        self.assertIn('[Black "Black"]', body["pgn"])

        resp = self.client.post("/api/simulations", json={"white": [], "black": [], "policy": "sometimes"})
        self.assertEqual(resp.status_code, 400)


if __name__ == "__main__":
    unittest.main()
