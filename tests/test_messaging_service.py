from sqlalchemy import func, select

from message_apps.models import Message
from message_apps.repositories import message_repository
from message_apps.utils.time_utils import utcnow


async def test_chat_history_in_both_directions(messaging_service, alice, bob):
    assert await messaging_service.send_message(alice.user_id, bob.user_id, "hi")
    assert await messaging_service.send_message(bob.user_id, alice.user_id, "hello")

    forward = await messaging_service.chat_history(alice.user_id, bob.user_id)
    backward = await messaging_service.chat_history(bob.user_id, alice.user_id)

    assert [m.message_text for m in forward] == ["hi", "hello"]
    assert [m.message_id for m in backward] == [m.message_id for m in forward]
    assert forward[0].created_at <= forward[1].created_at
    assert all(not m.is_read for m in forward)


async def test_chat_history_same_timestamp_keeps_send_order(messaging_service, alice, bob, monkeypatch):
    instant = utcnow()
    monkeypatch.setattr(message_repository, "utcnow", lambda: instant)

    for sender, receiver, text in ((alice, bob, "1"), (bob, alice, "2"), (alice, bob, "3")):
        assert await messaging_service.send_message(sender.user_id, receiver.user_id, text)

    for first, second in ((alice, bob), (bob, alice)):
        history = await messaging_service.chat_history(first.user_id, second.user_id)
        assert [m.message_text for m in history] == ["1", "2", "3"]


async def test_chat_history_excludes_other_conversations(messaging_service, auth_service, alice, bob):
    carol = await auth_service.register("carol", "carol@example.com", "password123")
    await messaging_service.send_message(alice.user_id, bob.user_id, "for bob")
    await messaging_service.send_message(alice.user_id, carol.user_id, "for carol")

    history = await messaging_service.chat_history(alice.user_id, bob.user_id)
    assert [m.message_text for m in history] == ["for bob"]


async def test_send_to_unknown_user_stores_nothing(messaging_service, db, alice):
    assert not await messaging_service.send_message(alice.user_id, 9999, "anyone there?")
    assert not await messaging_service.send_message(9999, alice.user_id, "hi")

    assert await db.scalar(select(func.count()).select_from(Message)) == 0


async def test_strangers_can_message(messaging_service, alice, bob):
    assert await messaging_service.send_message(alice.user_id, bob.user_id, "we are not friends")


async def test_delete_all(messaging_service, db, alice, bob):
    await messaging_service.send_message(alice.user_id, bob.user_id, "hi")

    await messaging_service.messages.delete_all()

    assert await db.scalar(select(func.count()).select_from(Message)) == 0
