from fastapi import Request

from cafe_pos.domain.session.service import PosSession


def get_pos(request: Request) -> PosSession:
    return request.app.state.pos
