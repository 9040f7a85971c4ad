# storefront/api/cookies.py
from uuid import uuid4

from fastapi import Request, Response

from storefront.utils.settings import CART_COOKIE_NAME, CART_COOKIE_MAX_AGE


def get_cart_id(request: Request, response: Response) -> str:
    """
    Id koszyka z cookie, generowane raz przy pierwszej wizycie.
    Nie jest httponly bo frontend tez go czyta (i kasuje po zamowieniu)
    """
    cart_id = request.cookies.get(CART_COOKIE_NAME)
    if not cart_id:
        cart_id = str(uuid4())
        response.set_cookie(
            CART_COOKIE_NAME,
            cart_id,
            max_age=CART_COOKIE_MAX_AGE,
            samesite="lax",
        )
    return cart_id
