import time
import subprocess
import httpx
import sys
import os
import signal

BASE_URL = "http://127.0.0.1:8000"
API_PREFIX = "/api"

SERVER_CMD = [sys.executable, "-m", "uvicorn", "dailyops.app.main:app", "--host", "127.0.0.1", "--port", "8000"]


def wait_for_server(retries=10, delay=2):
    url = f"{BASE_URL}/health"
    print(f"Waiting for server at {url}...")
    for i in range(retries):
        try:
            resp = httpx.get(url)
            if resp.status_code == 200:
                print("Server is up")
                return True
        except httpx.ConnectError:
            pass
        time.sleep(delay)
    print("Server failed to start")
    return False


def stop_server(proc):
    proc.send_signal(signal.SIGTERM)
    proc.wait()


def run_verification():
    # 1. Start Server (First Run)
    print("\n--- [Step 1] Starting Server (Initial) ---")
    proc = subprocess.Popen(SERVER_CMD, stdout=subprocess.PIPE, stderr=subprocess.PIPE, env={**os.environ})

    try:
        if not wait_for_server():
            server_logs = proc.communicate(timeout=2)
            print("Server Stdout:", server_logs[0].decode())
            print("Server Stderr:", server_logs[1].decode())
            raise Exception("Server start failed")

        # 2. Create a manager and open today's report
        print("\n--- [Step 2] Creating Manager and Report (Persistence Test) ---")
        user_payload = {
            "username": "persist_manager",
            "password": "persist123",
            "role": "manager",
            "fullName": "Persistence Check",
            "email": "persist@example.com"
        }
        resp = httpx.post(f"{BASE_URL}{API_PREFIX}/users", json=user_payload)

        if resp.status_code == 400 and "already registered" in resp.text:
            print("User already exists (persisted by a previous run?)")
        elif resp.status_code == 201:
            print("User created")
            user_id = resp.json()["id"]
            today = time.strftime("%Y-%m-%d")
            resp = httpx.post(f"{BASE_URL}{API_PREFIX}/daily-reports/user/{user_id}/date/{today}")
            print(f"Report opened: {resp.status_code} {resp.json().get('id')}")
        else:
            print(f"User creation failed: {resp.status_code} {resp.text}")
            raise Exception("User creation failed")

    finally:
        print("\n--- [Step 3] Stopping Server ---")
        stop_server(proc)

    time.sleep(2)  # Wait for port release

    # 3. Restart Server
    print("\n--- [Step 4] Restarting Server (Verification) ---")
    proc2 = subprocess.Popen(SERVER_CMD, stdout=subprocess.PIPE, stderr=subprocess.PIPE)

    try:
        if not wait_for_server():
            raise Exception("Server restart failed")

        # 4. Login
        print("\n--- [Step 5] Logging In (Post-Restart) ---")
        resp = httpx.post(
            f"{BASE_URL}{API_PREFIX}/login",
            json={"username": "persist_manager", "password": "persist123"}
        )

        if resp.status_code != 200:
            print(f"Login failed (persistence issue?): {resp.status_code} {resp.text}")
            raise Exception("Login failed after restart")

        print("Login successful (user persisted)")
        token = resp.json()["token"]
        user_id = resp.json()["user"]["id"]

        # 5. Verify session restore and reports
        print("\n--- [Step 6] Verifying Session and Reports ---")
        resp = httpx.get(f"{BASE_URL}{API_PREFIX}/me", headers={"Authorization": f"Bearer {token}"})
        print(f"Session restore: {resp.status_code}")
        resp = httpx.get(f"{BASE_URL}{API_PREFIX}/daily-reports/user/{user_id}")
        print(f"Reports after restart: {len(resp.json())}")

    finally:
        print("\n--- [Step 7] Stopping Server ---")
        stop_server(proc2)


if __name__ == "__main__":
    run_verification()
