"""Application layer DI providers."""

from dishka import Scope, provide

from tally.application.usecase.vote import CastVoteUseCase, GetVoteTalliesUseCase
from tally.domain.service import VoteService
from tally.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider."""

    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(self, vote_service: VoteService) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_vote_tallies_use_case(
        self, vote_service: VoteService
    ) -> GetVoteTalliesUseCase:
        """Provide get vote tallies use case."""
        return GetVoteTalliesUseCase(vote_service=vote_service)
