from tests.factories.subscription import SubscriptionFactory
from tests.factories.user import UserFactory
from tests.factories.video import VideoFactory


def test_user_repr_shows_handle_but_no_credentials(session):
    user = UserFactory(username="reprtest")
    session.commit()

    text = repr(user)

    assert text == f"<User id={user.id} username='reprtest'>"
    assert "password" not in text
    assert "refresh" not in text


def test_video_and_subscription_repr(session):
    video = VideoFactory(title="Launch day")
    sub = SubscriptionFactory()
    session.commit()

    assert repr(video) == f"<Video id={video.id} title='Launch day' owner_id={video.owner_id}>"
    assert repr(sub) == (
        f"<Subscription id={sub.id} subscriber_id={sub.subscriber_id} "
        f"channel_id={sub.channel_id}>"
    )
