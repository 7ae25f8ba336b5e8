"""Vote routes.

Vote submissions come from plain HTML forms on item pages, so every outcome
is a flash message plus a redirect back to the page the vote came from.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Form, Query, Request, status
from fastapi.responses import RedirectResponse

from tally.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteStatus,
    CastVoteUseCase,
    GetVoteTalliesRequest,
    GetVoteTalliesResponse,
    GetVoteTalliesUseCase,
)
from tally.config import VotingSettings
from tally.domain.service import JWTService
from tally.domain.value import VotableType, item_type_value
from tally.interface.api.flash import flash

UNAUTHORIZED_MESSAGE = "Only members can upvote items."
DUPLICATE_MESSAGE = "You can only upvote an item once."
RECORDED_MESSAGE = "Item upvoted. Awesome!"

# (path, item type, page to return to when there is no referrer)
VOTE_ROUTES = [
    ("/news/{item_id}/vote", VotableType.NEWS, "/news"),
    ("/comments/{item_id}/vote", VotableType.COMMENT, "/news"),
    ("/issues/{item_id}/vote", VotableType.ISSUE, "/issues"),
]

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


def respond_to_vote(
    request: Request,
    result: CastVoteResponse,
    root: str,
    signup_path: str,
) -> RedirectResponse:
    """Turn a cast vote outcome into flash messages and a redirect.

    Args:
        request: Current request
        result: Outcome of the vote submission
        root: Page to return to when the request has no referrer
        signup_path: Where anonymous visitors are sent

    Returns:
        303 redirect to the referrer, ``root`` or the signup page
    """
    back = request.headers.get("referer") or root

    if result.status == CastVoteStatus.INVALID:
        flash(request, "errors", [{"msg": error} for error in result.errors])
    elif result.status == CastVoteStatus.UNAUTHORIZED:
        flash(request, "errors", {"msg": UNAUTHORIZED_MESSAGE})
        back = signup_path
    elif result.status == CastVoteStatus.DUPLICATE:
        flash(request, "errors", {"msg": DUPLICATE_MESSAGE})
    elif result.status == CastVoteStatus.RECORDED:
        flash(request, "success", {"msg": RECORDED_MESSAGE})

    return RedirectResponse(back, status_code=status.HTTP_303_SEE_OTHER)


def vote_for(item_type: str, root: str):
    """Build the vote submission endpoint for one item type.

    Args:
        item_type: Category the votes are recorded under
        root: Page to return to when the request has no referrer

    Returns:
        FastAPI endpoint function
    """
    item_type = item_type_value(item_type)

    async def cast_vote(
        request: Request,
        item_id: str,
        cast_vote_use_case: FromDishka[CastVoteUseCase],
        jwt_service: FromDishka[JWTService],
        voting_settings: FromDishka[VotingSettings],
        amount: str = Form(default=""),
        auth_token: str | None = Cookie(default=None),
    ) -> RedirectResponse:
        user_id = jwt_service.get_user_id_from_token(auth_token)
        result = await cast_vote_use_case.execute(
            CastVoteRequest(
                item_type=item_type,
                item_id=item_id,
                amount=amount,
                user_id=user_id,
            )
        )
        return respond_to_vote(request, result, root, voting_settings.signup_path)

    cast_vote.__name__ = f"vote_for_{item_type}"
    return cast_vote


for path, votable_type, root_path in VOTE_ROUTES:
    router.add_api_route(
        path,
        vote_for(votable_type, root_path),
        methods=["POST"],
        status_code=status.HTTP_303_SEE_OTHER,
        response_class=RedirectResponse,
    )


@router.get("/votes/{item_type}", response_model=GetVoteTalliesResponse)
async def get_vote_tallies(
    item_type: str,
    get_vote_tallies_use_case: FromDishka[GetVoteTalliesUseCase],
    jwt_service: FromDishka[JWTService],
    ids: list[str] = Query(default=[]),
    auth_token: str | None = Cookie(default=None),
) -> GetVoteTalliesResponse:
    """Get vote counts for items of one type.

    Authentication is optional; without it ``voted_for`` is always false.

    Args:
        item_type: Item category, e.g. ``news``
        get_vote_tallies_use_case: Use case from DI
        jwt_service: JWT service for token verification (injected)
        ids: Item IDs, repeated query parameter
        auth_token: JWT token from cookie

    Returns:
        One tally per requested item ID
    """
    request = GetVoteTalliesRequest(
        item_type=item_type,
        item_ids=ids,
        user_id=jwt_service.get_user_id_from_token(auth_token),
    )
    return await get_vote_tallies_use_case.execute(request)
