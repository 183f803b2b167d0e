"""
Copyright (C) 2025  QuipFeed Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of QuipFeed. See the LICENSE file in the project
root for full license details.
"""
import abc
import asyncio
import logging
import typing


class BaseMicroserviceApplication(abc.ABC):
    """
    Base microservice class.

    Defines the lifecycle every service follows:

    * ``initialise()`` builds the service's resources. On failure anything
      already built is torn down again via ``stop()``.
    * ``run()`` keeps the service alive until the shutdown event is set.
    * ``stop()`` tears the resources down exactly once, however many times
      it is called.
    """
    __slots__ = ["_is_initialised", "_is_stopped", "_logger",
                 "_shutdown_complete", "_shutdown_event"]

    def __init__(self):
        self._is_initialised: bool = False
        self._is_stopped: bool = False
        self._logger: typing.Optional[logging.Logger] = None
        self._shutdown_event: asyncio.Event = asyncio.Event()
        self._shutdown_complete: asyncio.Event = asyncio.Event()

    @property
    def logger(self) -> logging.Logger:
        """
        Property getter for logger instance.

        returns:
            Returns the logger instance.
        """
        return self._logger

    @logger.setter
    def logger(self, logger: logging.Logger) -> None:
        self._logger = logger

    @property
    def is_initialised(self) -> bool:
        """ True once ``initialise()`` has completed successfully. """
        return self._is_initialised

    @property
    def shutdown_event(self) -> asyncio.Event:
        """
        Event used to signal the shutdown of the service. Setting it makes
        ``run()`` return and tear the service down.
        """
        return self._shutdown_event

    @property
    def shutdown_complete(self) -> asyncio.Event:
        """
        Event that is set once ``stop()`` has released every resource.
        """
        return self._shutdown_complete

    async def initialise(self) -> bool:
        """
        Microservice initialisation.

        Returns:
            Boolean: True => Successful, False => Unsuccessful.
        """
        if await self._initialise() is True:
            self._is_initialised = True
            return True

        await self.stop()

        return False

    async def run(self) -> None:
        """
        Wait until the shutdown event is set, then stop the microservice.
        """
        if not self._is_initialised:
            self._logger.warning("Microservice is not initialised, not "
                                 "running.")
            return

        self._logger.info("Microservice running.")

        try:
            await self._shutdown_event.wait()

        except asyncio.CancelledError:
            self._logger.debug("Service: Cancellation received.")
            raise

        finally:
            await self.stop()

    async def stop(self) -> None:
        """
        Stop the microservice. Only the first call performs the shutdown,
        later calls return immediately.
        """
        if self._is_stopped:
            return

        self._is_stopped = True
        self._shutdown_event.set()

        self._logger.info("Stopping microservice...")

        try:
            await self._shutdown()

        finally:
            self._shutdown_complete.set()
            self._logger.info("Microservice shutdown complete.")

    @abc.abstractmethod
    async def _initialise(self) -> bool:
        """
        Build the service's resources.

        Returns:
            Boolean: True => Successful, False => Unsuccessful.
        """

    @abc.abstractmethod
    async def _shutdown(self) -> None:
        """ Release the service's resources. """
