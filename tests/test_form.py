import asyncio

import httpx
import pytest

from account_api.core.errors import UNEXPECTED_ERROR_MESSAGE
from account_api.services.validation import NAME_MESSAGE, USERNAME_MESSAGE
from account_client.api import AccountApiClient, AccountApiError
from account_client.avatar import AvatarPrecheckError, precheck_avatar
from account_client.form import SAVED_MESSAGE, AccountForm, validate_draft

SETTLE = 0.02
BASE_URL = "http://testserver"

VALID = {
    "firstName": "Grace",
    "lastName": "Hopper",
    "email": "grace@example.com",
    "username": "ghopper",
}


def run_with_form(app, scenario):
    async def runner():
        transport = httpx.ASGITransport(app=app)
        async with AccountApiClient(BASE_URL, transport=transport) as api:
            form = AccountForm(api, settle_seconds=SETTLE)
            try:
                await form.load()
                return await scenario(form, api)
            finally:
                await form.aclose()

    return asyncio.run(runner())


def test_validate_draft_mirrors_server_rules():
    assert validate_draft(VALID) == {}
    errors = validate_draft({**VALID, "firstName": "John Doe", "username": "ab"})
    assert errors == {"firstName": NAME_MESSAGE, "username": USERNAME_MESSAGE}


def test_validate_draft_flags_known_taken_username():
    assert validate_draft(VALID, username_unique=False) == {"username": USERNAME_MESSAGE}


def test_load_populates_draft(ready_app):
    async def scenario(form, api):
        return dict(form.draft), form.avatar_url, form.username_check.is_unique

    draft, avatar_url, unique = run_with_form(ready_app, scenario)
    assert draft == {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "username": "adal",
    }
    assert avatar_url is None
    assert unique is True


def test_submit_saves_and_replaces_draft(ready_app):
    async def scenario(form, api):
        for field, value in VALID.items():
            form.set_field(field, f" {value}")
        await form.username_check.wait_idle()
        saved = await form.submit()
        return saved, dict(form.draft), form.notices, await api.get_account()

    saved, draft, notices, stored = run_with_form(ready_app, scenario)
    assert saved is True
    assert draft == VALID
    assert [notice.text for notice in notices] == [SAVED_MESSAGE]
    assert stored["username"] == "ghopper"


def test_local_validation_blocks_submit(ready_app):
    async def scenario(form, api):
        form.set_field("firstName", "John Doe")
        saved = await form.submit()
        return saved, form.field_errors, await api.get_account()

    saved, errors, stored = run_with_form(ready_app, scenario)
    assert saved is False
    assert errors == {"firstName": NAME_MESSAGE}
    assert stored["firstName"] == "Ada"


def test_editing_a_field_clears_its_error(ready_app):
    async def scenario(form, api):
        form.set_field("firstName", "John Doe")
        await form.submit()
        form.set_field("firstName", "John")
        return form.field_errors

    assert run_with_form(ready_app, scenario) == {}


def test_taken_username_blocks_submit(ready_legacy_app):
    async def scenario(form, api):
        form.set_field("username", "NEWNAME")
        await form.username_check.wait_idle()
        saved = await form.submit()
        return saved, form.username_check.is_unique, form.field_errors

    saved, unique, errors = run_with_form(ready_legacy_app, scenario)
    assert saved is False
    assert unique is False
    assert errors == {"username": USERNAME_MESSAGE}


def test_server_conflict_is_reported(ready_legacy_app):
    async def scenario(form, api):
        # Skips the debounced check, as if the last known result were stale.
        form.draft["username"] = "newname"
        saved = await form.submit()
        return saved, form.field_errors, form.notices, await api.get_account()

    saved, errors, notices, stored = run_with_form(ready_legacy_app, scenario)
    assert saved is False
    assert errors == {"username": USERNAME_MESSAGE}
    assert notices[-1].is_success is False
    assert stored["username"] == "adal"


def test_notices_are_dismissible(ready_legacy_app):
    async def scenario(form, api):
        form.draft["username"] = "newname"
        await form.submit()
        form.dismiss(form.notices[0])
        return form.notices

    assert run_with_form(ready_legacy_app, scenario) == []


def test_small_avatar_is_rejected_before_upload(ready_app, make_image):
    async def scenario(form, api):
        changed = await form.change_avatar(make_image(800, 799), "image/png", "me.png")
        return changed, form.notices, await api.get_account()

    changed, notices, stored = run_with_form(ready_app, scenario)
    assert changed is False
    assert notices[0].text == "Image must be at least 800x800 px."
    assert stored["avatarUrl"] is None
    assert list(ready_app.state.components.files.root.iterdir()) == []


def test_valid_avatar_is_uploaded(ready_app, make_image):
    async def scenario(form, api):
        changed = await form.change_avatar(make_image(800, 800, "JPEG"), "image/jpeg", "me.jpg")
        return changed, form.avatar_url, await api.get_account()

    changed, avatar_url, stored = run_with_form(ready_app, scenario)
    assert changed is True
    assert avatar_url == stored["avatarUrl"]
    assert avatar_url.endswith(".jpg")


def test_api_client_raises_with_server_message(ready_app):
    async def scenario(form, api):
        with pytest.raises(AccountApiError) as exc_info:
            await api.update_avatar(b"GIF89a", "image/gif", "a.gif")
        return exc_info.value

    error = run_with_form(ready_app, scenario)
    assert error.status_code == 400
    assert error.message == "Only PNG and JPG uploads are allowed."


def test_precheck_accepts_large_png(make_image):
    assert precheck_avatar(make_image(1024, 900), "image/png") == (1024, 900)


@pytest.mark.parametrize(
    "content_type, message",
    [
        ("image/gif", "Only PNG and JPG uploads are allowed."),
        ("image/png", "Invalid image file."),
    ],
)
def test_precheck_rejections(content_type, message):
    with pytest.raises(AvatarPrecheckError) as exc_info:
        precheck_avatar(b"definitely not an image", content_type)
    assert str(exc_info.value) == message


def test_failed_load_shows_shared_unexpected_error():
    async def runner():
        transport = httpx.MockTransport(lambda request: httpx.Response(500, json={}))
        async with AccountApiClient(BASE_URL, transport=transport) as api:
            form = AccountForm(api, settle_seconds=SETTLE)
            loaded = await form.load()
            await form.aclose()
            return loaded, form.notices

    loaded, notices = asyncio.run(runner())
    assert loaded is False
    assert [notice.text for notice in notices] == [UNEXPECTED_ERROR_MESSAGE]
