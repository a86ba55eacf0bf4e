from fastapi import APIRouter

from lawdesk.auth.router import router as auth_router
from lawdesk.clients.router import router as clients_router
from lawdesk.cases.router import router as cases_router
from lawdesk.consultations.router import router as consultations_router
from lawdesk.invoices.router import router as invoices_router
from lawdesk.communications.router import router as communications_router
from lawdesk.documents.router import router as documents_router
from lawdesk.portal.router import router as portal_router
from lawdesk.chat.router import router as chat_router
from lawdesk.search.router import router as search_router
from lawdesk.admin.router import router as admin_router

api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(clients_router)
api_router.include_router(cases_router)
api_router.include_router(consultations_router)
api_router.include_router(invoices_router)
api_router.include_router(communications_router)
api_router.include_router(documents_router)
api_router.include_router(portal_router)
api_router.include_router(chat_router)
api_router.include_router(search_router)
api_router.include_router(admin_router)
