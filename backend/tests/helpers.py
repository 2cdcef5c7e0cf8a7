from golf_tracker import db


def make_user(google_id='google-1', email='ann@example.com', name='Ann'):
    from golf_tracker.models import User
    user = User(google_id=google_id, email=email, name=name)
    db.session.add(user)
    db.session.commit()
    return user


def login_as(test_client, user):
    """Put ``user`` into the Flask-Login session of ``test_client``."""
    with test_client.session_transaction() as sess:
        sess['_user_id'] = str(user.id)
        sess['_fresh'] = True


def game_payload(*players, date=None):
    """Build a save-game body from ``(name, scores)`` pairs."""
    body = {
        'players': [
            {'name': name, 'scores': list(scores), 'totalScore': sum(scores)}
            for name, scores in players
        ]
    }
    if date:
        body['date'] = date
    return body


ANN = ('Ann', [1, 2, 3, 4, 5, 6, 7, 8, 9])
BO = ('Bo', [0, 0, 0, 0, 0, 0, 0, 0, 0])
