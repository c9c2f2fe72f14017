import pytest

from olimpiadas.core.password_strength import score


@pytest.mark.parametrize(
    "password, strength, label",
    [
        ("", 0, "Very weak"),
        ("abc", 1, "Very weak"),
        ("abcABC", 2, "Weak"),
        ("abcABC1", 3, "Medium"),
        ("abcdABCD1", 4, "Strong"),
        ("abcABC1!xy", 5, "Very strong"),
    ],
)
def test_score(password, strength, label):
    result = score(password)
    assert result.strength == strength
    assert result.label == label


def test_length_alone_counts_once():
    assert score("12345678").strength == 2


@pytest.mark.parametrize("char", list('!@#$%^&*(),.?":{}|<>'))
def test_each_special_character_counts(char):
    assert score(char).strength == 1


def test_unlisted_symbols_are_not_special():
    assert score("-_+=").strength == 0


def test_endpoint(client):
    resp = client.post("/api/v1/auth/password-strength", json={"password": "Abc123!x"})
    assert resp.status_code == 200
    assert resp.json() == {"strength": 5, "label": "Very strong"}
