"""Catch-all for anything the shop does not serve."""


def handler(request, response, next):
    response.send(f"Nothing at {request.path}", status=404)
