from fastapi import APIRouter

from kanban.api.routes import auth, board, cards, lists, projects, reports, teams, users


api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(projects.router)
api_router.include_router(board.router)
api_router.include_router(lists.router)
api_router.include_router(cards.router)
api_router.include_router(teams.router)
api_router.include_router(reports.router)
