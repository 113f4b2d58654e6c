from pathlib import Path


def draft_image(settings, user_id, name):
    folder = Path(settings.UPLOAD_ROOT) / "ForumResimler" / str(user_id)
    folder.mkdir(parents=True, exist_ok=True)
    (folder / name).write_bytes(b"img")
    return folder / name


def test_publishing_a_draft_moves_its_images(client, executor, settings):
    draft_image(settings, 7, "a.png")
    draft_image(settings, 7, "b.png")

    response = client.post("/CrateForumPost", json={"userId": 7})

    assert response.status_code == 200
    posted = Path(settings.UPLOAD_ROOT) / "ForumPost" / "7"
    assert sorted(path.name for path in posted.iterdir()) == ["a.png", "b.png"]
    assert not any((Path(settings.UPLOAD_ROOT) / "ForumResimler" / "7").iterdir())
    assert executor.last("sp_createForumPost").params == {"UserId": 7}


def test_deleting_a_draft_removes_its_images(client, executor, settings):
    image = draft_image(settings, 7, "a.png")

    client.post("/deleteDraftForumPost", json={"userId": 7})

    assert not image.exists()
    assert executor.last("sp_deleteDraft_Forum").params == {"UserId": 7}


def test_deleting_one_draft_image(client, executor, settings):
    image = draft_image(settings, 7, "a.png")
    executor.respond("sp_deleteDraft_ForumImage", [{"IMGUrl": "http://cdn.test/uploads/ForumResimler/7/a.png"}])

    response = client.post("/deleteDraftForumPostImage", json={"ImgID": 19})

    assert response.json() == 19
    assert not image.exists()


def test_forum_page_size_is_fixed(client, executor):
    client.post("/GetForumPost", json={"userId": 7, "first": 10, "l": 500})

    assert executor.last("sp_getFormPost2").params == {"UserId": 7, "f": 10, "l": 5}


def test_forum_post_images_travel_as_json(client, executor):
    client.post("/api/createForumPost", json={
        "userId": 7, "categoryId": 2, "contentText": "Yeni ürün", "imageList": ["a.png"],
    })

    assert executor.last("sp_createForumPost").params == {
        "userId": 7, "categoryId": 2, "provinceId": 0, "contentText": "Yeni ürün", "imageList": '["a.png"]',
    }


def test_comment_deletion_calls_the_comment_procedure(client, executor):
    client.post("/sp_deleteForumComment", json={"forumCommentId": 4})

    assert executor.last("sp_deleteForumComment").params == {"forumCommentId": 4}


def test_forum_page_follows_user_categories(signed_in, executor):
    executor.respond("v_UsersCategories", [{"categoryId": 2}, {"categoryId": 5}])

    response = signed_in.get("/forum")

    assert response.status_code == 200
    assert executor.last("v_forum").where == {"categoryId": [2, 5]}


def test_forum_page_reads_everything_in_one_batch(signed_in, executor):
    signed_in.get("/forum")

    assert executor.run_many_calls == [(
        ("DraftData", "allCategories", "forumImages", "forum", "forumComment", "allForumData"), True,
    )]


def test_seller_detail_reads_in_one_batch(signed_in, executor):
    response = signed_in.get("/sellerDetail/12")

    assert response.status_code == 200
    assert executor.run_many_calls == [(("sellerDetail", "sellerDetailInfo", "sellerProductList"), True)]
    assert executor.last("sp_getSellerDetailInfo").params == {"UserId": "12"}
