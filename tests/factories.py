from healthstore.db.models import Product


class FakeLLM:
    """
    Scripted stand-in for LLMClient. `replies` maps a substring of the system
    prompt to either a reply string or an exception to raise.
    """

    def __init__(self, replies=None, default=""):
        self.replies = dict(replies or {})
        self.default = default
        self.calls = []

    def chat_complete(self, system, user, *, temperature=0.7, max_tokens=500):
        self.calls.append({"system": system, "user": user, "temperature": temperature, "max_tokens": max_tokens})
        for needle, reply in self.replies.items():
            if needle in system:
                if isinstance(reply, Exception):
                    raise reply
                return reply
        return self.default


def make_product(title, tags=("wellness",), price=9.99, **kw):
    return Product(
        title=title,
        description=kw.get("description", f"{title} description"),
        price=price,
        tags=list(tags),
        image=kw.get("image", "https://img.example/p.png"),
        in_stock=kw.get("in_stock", True),
    )
