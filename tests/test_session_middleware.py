from mercass.exceptions import StoreError

LOGIN = "/userLoginandRegister"


def test_missing_cookie_redirects_before_any_store_call(client, executor, auth_service):
    response = client.get("/GetUsersprofile")

    assert response.status_code == 303
    assert response.headers["location"] == LOGIN
    assert executor.commands == []
    assert auth_service.calls == []


def test_unknown_token_redirects(client, executor, auth_service):
    client.cookies.set("Auth", "forged")

    response = client.get("/myAccount")

    assert response.status_code == 303
    assert response.headers["location"] == LOGIN
    assert auth_service.calls == [("/check", {"Auth": "forged"})]
    assert executor.commands == []


def test_token_mismatch_redirects(client, executor, auth_service):
    auth_service.sessions["token-1"] = {"Auth": "token-2", "UsersId": 7}
    client.cookies.set("Auth", "token-1")

    response = client.post("/api/userAccountFrezee", json={"UserId": 3})

    assert response.status_code == 303
    assert executor.commands == []


def test_auth_service_outage_redirects(client, executor, auth_service):
    auth_service.down = True
    client.cookies.set("Auth", "token-1")

    response = client.get("/chat")

    assert response.status_code == 303
    assert response.headers["location"] == LOGIN
    assert executor.commands == []


def test_valid_session_loads_the_profile(signed_in, executor):
    executor.respond("v_UsersProfiles", [{"usersId": 7, "ProfileTitle": "Satıcı"}])

    response = signed_in.get("/GetUsersprofile")

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {"usersId": 7, "ProfileTitle": "Satıcı"}}
    assert executor.last("v_UsersProfiles").where == {"usersId": 7}


def test_missing_profile_is_a_json_error(signed_in):
    response = signed_in.get("/GetUsersprofile")

    assert response.status_code == 404
    assert response.json() == {
        "Success": 0,
        "ErrCode": "not_found",
        "ErrKind": "not_found",
        "ErrMessage": "Kullanıcı profili bulunamadı",
    }


def test_guarded_command_runs_with_a_session(signed_in, executor):
    response = signed_in.post("/api/userAccountFrezee", json={"UserId": "3"})

    assert response.status_code == 200
    assert executor.last("sp_userAccountFrezee").params == {"UserId": 3}


def test_store_failure_on_json_route_uses_the_error_envelope(client, executor):
    executor.fail("v_ActiveUsers", StoreError("Veritabanı hatası: timeout"))

    response = client.get("/api/activeUsers")

    assert response.status_code == 500
    assert response.json()["ErrKind"] == "store"
    assert response.json()["Success"] == 0
