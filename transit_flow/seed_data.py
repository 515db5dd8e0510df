"""Initial obstructions, comments and routes for Tacna."""
from datetime import datetime, timedelta, timezone
from typing import List

from .models import (
    Comment,
    GeoCoordinates,
    Obstruction,
    ObstructionType,
    Route,
    RouteStatus,
)


def _ago(**delta) -> str:
    return (datetime.now(timezone.utc) - timedelta(**delta)).isoformat()


def initial_obstructions() -> List[Obstruction]:
    return [
        Obstruction(
            id="obs1",
            coordinates=GeoCoordinates(lat=-18.006, lng=-70.248),
            type=ObstructionType.CONSTRUCTION,
            title="Roadworks on Av. Bolognesi",
            description="Major road construction on Avenida Bolognesi near the central market. Expect delays.",
            added_at=_ago(days=2),
        ),
        Obstruction(
            id="obs2",
            coordinates=GeoCoordinates(lat=-18.014, lng=-70.253),
            end_coordinates=GeoCoordinates(lat=-18.0135, lng=-70.252),
            type=ObstructionType.CLOSURE,
            title="Street Fair Closure on San Martin",
            description="Calle San Martin closed for a local festival between indicated points until Sunday evening.",
            added_at=_ago(days=1),
        ),
        Obstruction(
            id="obs3",
            coordinates=GeoCoordinates(lat=-18.010, lng=-70.250),
            type=ObstructionType.ACCIDENT,
            title="Minor Accident",
            description="Minor accident at the intersection, causing slight delays.",
            added_at=_ago(hours=2),
        ),
    ]


def initial_comments() -> List[Comment]:
    return [
        Comment(
            id="com1",
            text="Heavy traffic jam near Plaza de Armas due to an unannounced parade.",
            submitted_at=_ago(hours=3),
            coordinates=GeoCoordinates(lat=-18.0146, lng=-70.2534),
        ),
        Comment(
            id="com2",
            text="Accident on Av. Leguia, blocking one lane. Police on site.",
            submitted_at=_ago(hours=1),
            coordinates=GeoCoordinates(lat=-18.020, lng=-70.250),
        ),
    ]


def initial_routes() -> List[Route]:
    return [
        Route(
            id="R001",
            name="Ruta A - Expreso Centro",
            path_description="Plaza de Armas - Av. Bolognesi - Mercado Central - Ovalo Cusco",
            status=RouteStatus.OPEN,
        ),
        Route(
            id="R002",
            name="Ruta B - Circunvalación",
            path_description="Terminal Terrestre - Av. Leguia - Hospital Regional - Cono Sur",
            status=RouteStatus.CONGESTED,
        ),
        Route(
            id="R003",
            name="Ruta C - Norte Directo",
            path_description="Ciudad Nueva - Av. Internacional - Aeropuerto - Alto de la Alianza",
            status=RouteStatus.BLOCKED,
        ),
        Route(
            id="R004",
            name="Ruta D - Playas",
            path_description="Centro - Boca del Río (Solo Verano)",
            status=RouteStatus.OPEN,
        ),
        Route(
            id="R005",
            name="Ruta E - Alimentadora Oeste",
            path_description="Para Chico - Av. Collpa - Gregorio Albarracín",
            status=RouteStatus.CONGESTED,
        ),
    ]
