TEST_TOKEN = "test-secret"
ALICE = "alice@example.com"
BOB = "bob@example.com"


def auth_headers(email=ALICE, token=TEST_TOKEN):
    return {"X-User-Email": email, "X-Backend-Token": token}
