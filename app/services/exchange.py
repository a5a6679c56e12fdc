from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional

import httpx
from loguru import logger

from app.core.config import Settings

USD_BRL_URL = "https://economia.awesomeapi.com.br/json/last/USD-BRL"


async def fetch_usd_brl_rate(client: Optional[httpx.AsyncClient] = None) -> Decimal:
    if client is None:
        async with httpx.AsyncClient(timeout=10) as own_client:
            return await fetch_usd_brl_rate(own_client)

    r = await client.get(USD_BRL_URL)
    r.raise_for_status()
    data = r.json()
    bid = data["USDBRL"]["bid"]  # string tipo "5.2345"
    return Decimal(bid)


async def resolve_exchange_rate(
    requested: Optional[float],
    config: Settings,
    client: Optional[httpx.AsyncClient] = None,
) -> float:
    """
    Câmbio usado no cálculo: o informado no payload, senão a cotação do dia
    (se FETCH_LIVE_EXCHANGE_RATE), senão DEFAULT_EXCHANGE_RATE.
    """
    if requested is not None:
        return requested

    if config.FETCH_LIVE_EXCHANGE_RATE:
        try:
            rate = await fetch_usd_brl_rate(client)
            if rate > 0:
                logger.info("Cotação USD-BRL obtida: {}", rate)
                return float(rate)
            logger.warning("Cotação USD-BRL inválida ({}), usando padrão", rate)
        except (httpx.HTTPError, KeyError, TypeError, ValueError, InvalidOperation) as e:
            logger.warning("Falha ao buscar cotação USD-BRL: {}. Usando padrão", e)

    return config.DEFAULT_EXCHANGE_RATE
