# authclient/api.py

import os
import requests
from dotenv import load_dotenv


load_dotenv()

# Base URL of the auth server
AUTH_SERVER_URL = os.getenv("AUTH_SERVER_URL", "http://localhost:5050")


class AuthClientError(Exception):
    """
    Raised when the server answers with an error status.
    Carries the status code and the server's message.
    """

    def __init__(self, status_code, message):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _raise_for_error(response):
    if response.status_code < 400:
        return
    try:
        message = response.json().get("message", response.text)
    except ValueError:
        message = response.text
    raise AuthClientError(response.status_code, message)


# -------------------------------
# Authentication-related functions
# -------------------------------

def signup_user(name, username, email, password, base_url=AUTH_SERVER_URL, http=requests):
    """
    Registers a new account and returns its bearer token.
    """
    response = http.post(
        f"{base_url}/auth/signup",
        json={
            "name": name,
            "username": username,
            "email": email,
            "password": password,
        },
    )
    _raise_for_error(response)
    return response.json()["token"]


def login_user(username, password, base_url=AUTH_SERVER_URL, http=requests):
    """
    Logs in and returns a fresh bearer token.
    """
    response = http.post(
        f"{base_url}/auth/login",
        json={"username": username, "password": password},
    )
    _raise_for_error(response)
    return response.json()["token"]


def get_user_info(token, base_url=AUTH_SERVER_URL, http=requests):
    """
    Retrieves the current user's profile using the bearer token.
    """
    response = http.get(
        f"{base_url}/auth/me",
        headers={"Authorization": f"Bearer {token}"},
    )
    _raise_for_error(response)
    return response.json()
