"""Tendering - one bid per professional per project, with a frozen proposal."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.matchboard.core.exceptions import ConflictError, ForbiddenError, NotFoundError
from src.matchboard.core.logging import get_logger
from src.matchboard.core.security import Principal
from src.matchboard.models import Bid, BidStatus
from src.matchboard.models.base import utc_now
from src.matchboard.repositories import (
    BidRepository,
    PortfolioItemRepository,
    ProjectRepository,
    QualificationRepository,
)
from src.matchboard.schemas.tendering import BidCreate
from src.matchboard.services.policy import Operation, authorize
from src.matchboard.services.proposal import ProposalFields, order_by_request, render_proposal

logger = get_logger(__name__)

DUPLICATE_BID_MESSAGE = "You have already applied to this project"


class TenderingService:
    def __init__(
        self,
        project_repo: ProjectRepository,
        bid_repo: BidRepository,
        qualification_repo: QualificationRepository,
        portfolio_repo: PortfolioItemRepository,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.bid_repo = bid_repo
        self.qualification_repo = qualification_repo
        self.portfolio_repo = portfolio_repo
        self.session = session

    async def submit_bid(self, principal: Principal, project_id: UUID, data: BidCreate) -> Bid:
        """Submit the caller's bid for a project.

        Qualification and portfolio ids that do not belong to the caller's
        own profile are dropped from the snapshot without error.

        Raises:
            ForbiddenError: caller is not a PROFESSIONAL with a profile
            NotFoundError: project does not exist
            ConflictError: caller already has a bid on this project
        """
        authorize(principal, Operation.SUBMIT_BID)
        professional_id = principal.professional_id
        if professional_id is None:
            raise ForbiddenError()

        if await self.project_repo.get_by_id(project_id) is None:
            raise NotFoundError(f"Project {project_id} not found")

        if await self.bid_repo.get_for_pair(project_id, professional_id) is not None:
            raise ConflictError(DUPLICATE_BID_MESSAGE)

        qualifications = order_by_request(
            await self.qualification_repo.list_owned(professional_id, data.qualification_ids),
            data.qualification_ids,
        )
        portfolio_items = order_by_request(
            await self.portfolio_repo.list_owned(professional_id, data.portfolio_ids),
            data.portfolio_ids,
        )

        proposal_text = render_proposal(
            ProposalFields(
                narrative=data.proposal_text,
                fee_proposal=data.fee_proposal,
                methodology=data.methodology,
                timeline=data.timeline,
            ),
            qualifications,
            portfolio_items,
        )

        bid = Bid(
            project_id=project_id,
            professional_id=professional_id,
            status=BidStatus.SUBMITTED.value,
            proposal_text=proposal_text,
            submitted_at=utc_now(),
        )
        self.bid_repo.add(bid)

        try:
            await self.session.commit()
        except IntegrityError as e:
            # Concurrent submission for the same pair won the unique constraint
            await self.session.rollback()
            raise ConflictError(DUPLICATE_BID_MESSAGE) from e
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "bid_submitted",
            project_id=str(project_id),
            professional_id=str(professional_id),
            bid_id=str(bid.id),
            qualifications=len(qualifications),
            portfolio_items=len(portfolio_items),
        )
        return bid
