"""
System smoke test: register, log in and read the profile in-process,
against a SQLite database file and a freshly generated RSA key pair.
"""

from user_service.kernel.identity.dispatch import BackgroundDispatcher
from user_service.kernel.identity.identity_service import IdentityService
from user_service.kernel.identity.outcomes import Success

PHONE = "+62812345678"
NAME = "fullloooo"
PASSWORD = "AAssff1!"


async def test_health(client):
    response = await client.get("/health")
    
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


async def test_register_login_profile_flow(client, api_prefix, auth_headers, jwt_manager):
    registered = await client.post(
        f"{api_prefix}/registration",
        json={"phone_number": PHONE, "full_name": NAME, "password": PASSWORD},
    )
    assert registered.status_code == 200
    user_id = int(registered.json()["id"])
    
    login = await client.post(
        f"{api_prefix}/login",
        json={"phone_number": PHONE, "password": PASSWORD},
    )
    assert login.status_code == 200
    token = login.json()["token"]
    assert jwt_manager.decode_access_token(token).id == user_id
    
    profile = await client.get(f"{api_prefix}/profile", headers=auth_headers(token))
    assert profile.status_code == 200
    assert profile.json() == {"phone_number": PHONE, "full_name": NAME}


async def test_login_counter_updated_in_background(
    user_store, login_count, hasher, jwt_manager
):
    dispatcher = BackgroundDispatcher()
    service = IdentityService(user_store, hasher, jwt_manager, dispatcher)
    registered = await service.register_user(PHONE, NAME, PASSWORD)
    
    for _ in range(3):
        assert isinstance(await service.authenticate(PHONE, PASSWORD), Success)
    await dispatcher.drain(timeout=5)
    
    assert await login_count(registered.value) == 3
