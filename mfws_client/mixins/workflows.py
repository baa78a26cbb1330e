"""Workflow operations mixin."""

from typing import Iterable, List, Optional

from ..exceptions import InvalidArgumentError
from ..models import WorkflowState


def _to_states(data) -> List[WorkflowState]:
    return [WorkflowState.from_dict(s) for s in data or []]


class WorkflowsMixin:
    """
    Mixin providing workflow structure operations.

    Requires on self:
        - _execute(method, resource, json=None, headers=None, parse=None)
        - _get_ids_by_aliases(resource, aliases)
        - _get_id_by_alias(resource, alias)
    """

    def get_workflow_states(self, workflow_id: int) -> List[WorkflowState]:
        """Get the states of a workflow."""
        return self._execute(
            "GET",
            f"/REST/structure/workflows/{workflow_id}/states.aspx",
            parse=_to_states,
        )

    def get_workflow_state_by_name(
        self, workflow_id: int, state_name: str
    ) -> Optional[WorkflowState]:
        """Get a workflow state by name (case-insensitive), or None."""
        if not state_name:
            raise InvalidArgumentError("A state name is required")
        wanted = state_name.casefold()

        def find(data) -> Optional[WorkflowState]:
            for state in _to_states(data):
                if state.name.casefold() == wanted:
                    return state
            return None

        return self._execute(
            "GET",
            f"/REST/structure/workflows/{workflow_id}/states.aspx",
            parse=find,
        )

    # Alias lookups return -1 for aliases the server does not know.

    def get_workflow_ids_by_aliases(self, aliases: Iterable[str]) -> List[int]:
        return self._get_ids_by_aliases("/REST/structure/workflows/itemidbyalias.aspx", aliases)

    def get_workflow_id_by_alias(self, alias: str) -> int:
        return self._get_id_by_alias("/REST/structure/workflows/itemidbyalias.aspx", alias)

    def get_workflow_state_ids_by_aliases(self, aliases: Iterable[str]) -> List[int]:
        return self._get_ids_by_aliases(
            "/REST/structure/workflowstates/itemidbyalias.aspx", aliases
        )

    def get_workflow_state_id_by_alias(self, alias: str) -> int:
        return self._get_id_by_alias("/REST/structure/workflowstates/itemidbyalias.aspx", alias)

    def get_workflow_state_transition_ids_by_aliases(self, aliases: Iterable[str]) -> List[int]:
        return self._get_ids_by_aliases(
            "/REST/structure/statetransitions/itemidbyalias.aspx", aliases
        )

    def get_workflow_state_transition_id_by_alias(self, alias: str) -> int:
        return self._get_id_by_alias(
            "/REST/structure/statetransitions/itemidbyalias.aspx", alias
        )
