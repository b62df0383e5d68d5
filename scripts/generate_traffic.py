import random
import time
import requests

BASE_URL = "http://127.0.0.1:8000"
HEADERS = {"X-Request-Source": "traffic-script"}
LEVELS = ["debug", "info", "notice", "warning", "error", "critical"]


def post_json(path: str, payload: dict):
    return requests.post(f"{BASE_URL}{path}", json=payload, headers=HEADERS, timeout=5)


def main():
    random.seed(42)

    # 1) Health checks
    for _ in range(20):
        requests.get(f"{BASE_URL}/health", headers=HEADERS, timeout=5)
        time.sleep(random.uniform(0.01, 0.03))

    # 2) Valid events at mixed levels
    for i in range(100):
        level = random.choice(LEVELS)
        post_json("/events", {
            "level": level,
            "message": f"synthetic event {i}",
            "context": {"seq": i, "source": "traffic-script", "ratio": random.choice([0.5, 1.0, 2.0])},
        })
        time.sleep(random.uniform(0.01, 0.03))

    # 3) Invalid events (4xx lines)
    for payload in ({"message": ""}, {"message": "x", "level": "loud"}, {"message": "x", "context": [1, 2]}):
        post_json("/events", payload)

    # 4) Unknown routes (404 lines)
    for _ in range(5):
        requests.get(f"{BASE_URL}/missing/{random.randint(1, 999)}", headers=HEADERS, timeout=5)


if __name__ == "__main__":
    main()
