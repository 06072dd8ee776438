"""Router configuration and wiring for all bot handlers."""

from aiogram import Dispatcher, Router

from reelpick.bot.handlers_flow import router as flow_router
from reelpick.bot.handlers_start import router as start_router

main_router = Router(name="main")


def setup_routers(dp: Dispatcher) -> None:
    """Wire all routers to the dispatcher.

    Start handler is included first as it handles the commands.
    Flow handler includes the preferences panel callbacks.

    Args:
        dp: The aiogram Dispatcher instance
    """
    main_router.include_router(start_router)
    main_router.include_router(flow_router)

    dp.include_router(main_router)
