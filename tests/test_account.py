import io

PASSWORDS = {"account_current_password": "eski", "account_new_password": "yeni", "account_confirm_password": "yeni"}


def test_password_confirmation_mismatch(signed_in, executor):
    response = signed_in.post("/updateMyAccountPassword", json={**PASSWORDS, "account_confirm_password": "baska"})

    assert response.status_code == 400
    assert response.json()["ErrCode"] == 1
    assert response.json()["ErrMessage"] == "Şifreler Uyuşmuyor"
    assert executor.commands == []


def test_new_password_must_differ(signed_in, executor):
    body = {"account_current_password": "ayni", "account_new_password": "ayni", "account_confirm_password": "ayni"}

    response = signed_in.post("/updateMyAccountPassword", json=body)

    assert response.status_code == 400
    assert executor.commands == []


def test_password_change_uses_the_session_user(signed_in, executor):
    executor.respond("sp_ChangePassword", [{"Success": 1}])

    response = signed_in.post("/updateMyAccountPassword", json={**PASSWORDS, "UsersId": 99})

    assert response.json() == {"ErrCode": 0, "ErrMessage": "Şifre başarıyla güncellendi"}
    assert executor.last("sp_ChangePassword").params == {"UsersId": 7, "newPass": "yeni", "oldPass": "eski"}


def test_password_change_refused_by_the_store(signed_in, executor):
    executor.respond("sp_ChangePassword", [{"Success": 0, "Message": "Mevcut şifre hatalı"}])

    response = signed_in.post("/updateMyAccountPassword", json=PASSWORDS)

    assert response.status_code == 500
    assert response.json()["ErrCode"] == 2
    assert response.json()["ErrMessage"] == "Mevcut şifre hatalı"


def test_account_info_update(signed_in, executor):
    executor.respond("sp_updateUsersProfileBase", [{"Success": 1, "Message": "Güncellendi"}])

    response = signed_in.post("/updateMyAccountInfo", json={"account_first_name": "Ada", "account_email": "a@b.co"})

    assert response.json() == {"Success": 1, "Message": "Güncellendi"}
    params = executor.last("sp_updateUsersProfileBase").params
    assert params["UsersId"] == 7
    assert params["ProfileName"] == "Ada"
    assert params["Email"] == "a@b.co"


def test_profile_photo_upload(signed_in, executor, settings):
    response = signed_in.post(
        "/updatemyAccount",
        data={"ProfileTitle": "Mağaza", "isNewUploadProfile": "true", "isNewUploadProfileBg": "false"},
        files={"photo": ("me.jpg", io.BytesIO(b"jpg"), "image/jpeg")},
    )

    assert response.status_code == 200
    params = executor.last("sp_updateUsersProfile").params
    assert params["userId"] == 7
    assert params["ProfilePhoto"] == "http://cdn.test/uploads/userProfile/7/me.jpg"
    assert params["ProfileBG"] == ""
