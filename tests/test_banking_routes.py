from conftest import auth_headers

PROFILE = {
    "address": {"street": "123 Main St", "city": "Anytown", "state": "CA", "zip_code": "12345"},
    "employment_status": "employed",
    "monthly_income": 5000,
    "monthly_debt": 1500,
}


def test_signup_login_and_me(client):
    resp = client.post("/api/auth/signup", json={
        "name": "Alice", "email": "Alice@Example.com", "password": "password1",
    })
    assert resp.status_code == 200
    assert resp.json()["token_type"] == "bearer"

    dup = client.post("/api/auth/signup", json={
        "name": "Alice", "email": "alice@example.com", "password": "password1",
    })
    assert dup.status_code == 400

    login = client.post("/api/auth/login", data={"username": "alice@example.com", "password": "password1"})
    assert login.status_code == 200
    token = login.json()["access_token"]

    me = client.get("/api/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    data = me.json()
    assert data["email"] == "alice@example.com"
    assert data["role"] == "user"
    assert data["loan_status"] == "none"
    assert data["credit_score"] == 550
    assert "password_hash" not in data


def test_login_with_wrong_password(client, make_user):
    make_user("bob@example.com")
    resp = client.post("/api/auth/login", data={"username": "bob@example.com", "password": "nope"})
    assert resp.status_code == 401


def test_banking_requires_token(client, make_user):
    user = make_user("carol@example.com")
    resp = client.get(f"/api/banking/credit-score/{user.id}")
    assert resp.status_code == 401


def test_user_cannot_read_someone_else(client, make_user):
    me = make_user("dave@example.com")
    other = make_user("erin@example.com")
    resp = client.get(f"/api/banking/fraud-score/{other.email}", headers=auth_headers(me))
    assert resp.status_code == 403


def test_scores_and_history_for_self(client, make_user):
    me = make_user("frank@example.com", credit_score=710)
    headers = auth_headers(me)

    credit = client.get(f"/api/banking/credit-score/{me.email}", headers=headers)
    assert credit.status_code == 200
    assert credit.json() == {"user_id": str(me.id), "credit_score": 710}

    fraud = client.get(f"/api/banking/fraud-score/{me.id}", headers=headers)
    assert fraud.json()["fraud_status"] == "low"

    history = client.get(f"/api/banking/transaction-history/{me.id}", headers=headers)
    assert history.status_code == 200
    assert len(history.json()["transactions"]) == 2


def test_admin_lookup_of_missing_user_is_404(client, admin):
    resp = client.get("/api/banking/credit-score/ghost@example.com", headers=auth_headers(admin))
    assert resp.status_code == 404
    assert resp.json()["detail"] == "User not found"


def test_apply_before_profile_is_rejected(client, make_user):
    me = make_user("gina@example.com")
    resp = client.post(
        f"/api/banking/loan-application/{me.id}",
        json={"amount": 5000, "purpose": "car"},
        headers=auth_headers(me),
    )
    assert resp.status_code == 400
    assert "incomplete" in resp.json()["detail"]


def test_profile_then_apply(client, db, make_user):
    me = make_user("hank@example.com")
    headers = auth_headers(me)

    resp = client.put(f"/api/banking/profile/{me.id}", json=PROFILE, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["address"]["city"] == "Anytown"
    assert resp.json()["monthly_income"] == 5000

    resp = client.post(
        f"/api/banking/loan-application/{me.id}",
        json={"amount": 5000, "purpose": "car"},
        headers=headers,
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "pending_assessment"

    again = client.post(
        f"/api/banking/loan-application/{me.id}",
        json={"amount": 100, "purpose": "again"},
        headers=headers,
    )
    assert again.status_code == 400

    decision = client.get(f"/api/banking/loan-decision/{me.id}", headers=headers)
    body = decision.json()
    assert body["loan_status"] == "pending_assessment"
    assert body["amount"] == 5000
    assert body["recommendation"] is None

    db.refresh(me)
    assert me.loan_purpose == "car"


def test_profile_validation(client, make_user):
    me = make_user("ivy@example.com")
    bad = dict(PROFILE, monthly_income=-1)
    resp = client.put(f"/api/banking/profile/{me.id}", json=bad, headers=auth_headers(me))
    assert resp.status_code == 422


def test_loan_amount_must_be_positive(client, make_user):
    me = make_user("jack@example.com")
    resp = client.post(
        f"/api/banking/loan-application/{me.id}",
        json={"amount": 0, "purpose": "car"},
        headers=auth_headers(me),
    )
    assert resp.status_code == 422
