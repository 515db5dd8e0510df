"""Admin obstruction list and the creation flow around SegmentEditor."""
from typing import List, Optional
import logging

from ..actions import TransitActions
from ..admin import SegmentEditor
from ..errors import GeocodingError, InvalidTransition, ProviderError, ValidationFailed
from ..models import GeoCoordinates, Obstruction, RegionBias
from ..notifier import Notifier
from ..optimistic import OptimisticUpdateRejected, run_optimistic
from ..providers import Geocoder
from ..validation import ValidationResult

logger = logging.getLogger(__name__)



class ObstructionPanel:
    def __init__(
        self,
        actions: TransitActions,
        notifier: Optional[Notifier] = None,
        geocoder: Optional[Geocoder] = None,
        region: Optional[RegionBias] = None,
    ):
        self.actions = actions
        self.notifier = notifier or Notifier()
        self.geocoder = geocoder
        self.region = region
        self.editor = SegmentEditor()
        self.obstructions: List[Obstruction] = []
        self.is_loading = False
        self.is_submitting = False
        self.validation: Optional[ValidationResult] = None

    async def load(self) -> None:
        self.is_loading = True
        try:
            self.obstructions = await self.actions.get_obstructions()
        except Exception as e:
            logger.error(f"Failed to load obstructions: {e}")
            self.notifier.error("Error", "Could not load road obstructions.")
        finally:
            self.is_loading = False

    # ============= Selection =============

    def start_segment(self) -> None:
        self.editor.start_segment_by_map()

    def handle_map_click(self, coords: GeoCoordinates) -> None:
        self.editor.handle_map_click(coords)

    def cancel(self) -> None:
        self.editor.cancel()

    def close_dialog(self) -> None:
        self.editor.close_dialog()

    def define_segment_by_coordinates(self, start_lat, start_lng, end_lat, end_lng) -> bool:
        try:
            self.editor.define_segment_by_coordinates(start_lat, start_lng, end_lat, end_lng)
        except ValidationFailed as e:
            self.notifier.error("Invalid coordinates", str(e))
            return False
        return True

    async def define_segment_by_addresses(self, start_address: str, end_address: str) -> bool:
        if self.geocoder is None:
            self.notifier.error("Map not ready", "Geocoding is not available. Check the map configuration.")
            return False

        self.is_loading = True
        try:
            await self.editor.define_segment_by_addresses(start_address, end_address, self.geocoder, self.region)
        except GeocodingError as e:
            names = " and ".join(e.failed)
            self.notifier.error("Address not found", f"Could not find the {names} address in the local area.")
            return False
        except ValidationFailed as e:
            self.notifier.error("Missing address", str(e))
            return False
        except ProviderError as e:
            self.notifier.error("Geocoding unavailable", str(e))
            return False
        finally:
            self.is_loading = False
        return True

    # ============= Store operations =============

    async def submit_details(self, form: dict) -> Optional[Obstruction]:
        """
        Store the obstruction described by the dialog.

        On validation errors the selection is kept so the user can correct the form.
        InvalidTransition is re-raised after the notice; the editor state is left as is.
        """
        self.validation = None
        try:
            payload = self.editor.build_submission(form)
        except InvalidTransition as e:
            self.notifier.error("Error", str(e))
            raise
        except ValidationFailed as e:
            self.validation = e.result
            self.notifier.error("Error", str(e))
            return None

        self.is_submitting = True
        try:
            created = await self.actions.add_obstruction(payload)
        except Exception as e:
            logger.error(f"Failed to add obstruction: {e}")
            self.notifier.error("Failed to add obstruction", str(e))
            return None
        finally:
            self.is_submitting = False

        self.obstructions.append(created)
        self.editor.complete()
        kind = "Segment" if created.is_segment else "Obstruction"
        self.notifier.info(f"{kind} added", f'"{created.title}" is now shown on the map.')
        return created

    async def remove(self, obstruction_id: str) -> bool:
        """Hide the obstruction at once; bring it back if the store does not confirm."""
        target = next((o for o in self.obstructions if o.id == obstruction_id), None)
        title = target.title if target else obstruction_id

        def apply():
            self.obstructions = [o for o in self.obstructions if o.id != obstruction_id]

        def restore(saved: List[Obstruction]):
            self.obstructions = saved

        try:
            await run_optimistic(
                apply,
                lambda: self.actions.remove_obstruction(obstruction_id),
                snapshot=lambda: list(self.obstructions),
                restore=restore,
                acknowledged=lambda result: result.success,
            )
        except OptimisticUpdateRejected:
            self.notifier.error("Obstruction not found", f'"{title}" was already removed.')
            return False
        except Exception as e:
            logger.error(f"Failed to remove obstruction: {e}")
            self.notifier.error("Failed to remove obstruction", str(e))
            return False

        self.notifier.info("Obstruction removed", f'"{title}" was removed from the map.')
        return True
