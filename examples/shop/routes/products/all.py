"""Catch-all below /products."""


async def handler(request, response, next):
    response.send("No such product", status=404)
