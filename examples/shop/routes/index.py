"""GET /"""


def get(request, response, next):
    response.send("Welcome to the shop")
