"""
------------------------------------------------------------------------------
Project:        StartGrid
File:           startgrid/drag_state.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Merge/reorder state machine for a drag session, expressed as
                an immutable DragState plus pure transition functions. Each
                transition returns the next state and the timer/candidate
                effects the engine has to carry out.
------------------------------------------------------------------------------
"""

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Optional, Sequence, Tuple

from startgrid.collision import OUTSIDE_REGION_ID, Classification, CollisionKind
from startgrid.models.item import Folder, find_item


class DragPhase(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    ARMED = "armed"
    MERGE_PENDING = "merge-pending"
    DRAG_OUT_ARMED = "drag-out-armed"
    DRAG_OUT_PENDING = "drag-out-pending"


class Effect(Enum):
    START_MERGE_TIMER = auto()
    CANCEL_MERGE_TIMER = auto()
    START_DRAG_OUT_TIMER = auto()
    CANCEL_DRAG_OUT_TIMER = auto()
    SET_MERGE_CANDIDATE = auto()
    CLEAR_MERGE_CANDIDATE = auto()
    APPLY_DRAG_OUT = auto()


class DropAction(str, Enum):
    NONE = "none"
    MERGE = "merge"
    REORDER = "reorder"


@dataclass(frozen=True)
class DragState:
    phase: DragPhase = DragPhase.IDLE
    active_id: Optional[str] = None
    over_id: Optional[str] = None
    over_index: Optional[int] = None
    collision: Optional[CollisionKind] = None
    session: int = 0

    @property
    def is_active(self) -> bool:
        return self.phase != DragPhase.IDLE

    @property
    def merge_target(self) -> Optional[str]:
        """Target the merge timer is running (or has fired) for."""
        if self.phase in (DragPhase.ARMED, DragPhase.MERGE_PENDING):
            return self.over_id
        return None

    def __str__(self) -> str:
        return f"{self.phase.value}(active={self.active_id}, over={self.over_id}, session={self.session})"


IDLE = DragState()


@dataclass(frozen=True)
class Step:
    state: DragState
    effects: Tuple[Effect, ...] = ()


@dataclass(frozen=True)
class DropDecision:
    action: DropAction
    active_id: Optional[str] = None
    over_id: Optional[str] = None


_CANCEL_MERGE = (Effect.CANCEL_MERGE_TIMER, Effect.CLEAR_MERGE_CANDIDATE)


def start(active_id: str, session: int) -> Step:
    return Step(DragState(phase=DragPhase.DRAGGING, active_id=active_id, session=session))


def is_merge_eligible(items: Sequence, active_id: Optional[str], over_id: Optional[str]) -> bool:
    """
    A merge needs a leaf source and a target, both in the root sequence.
    Folders are never merge sources.
    """
    if active_id is None or over_id is None or active_id == over_id:
        return False
    active = find_item(items, active_id)
    over = find_item(items, over_id)
    if active is None or over is None:
        return False
    if not (active.in_root and over.in_root):
        return False
    return not isinstance(active.item, Folder)


def move(state: DragState, items: Sequence, classification: Classification) -> Step:
    """Advances the machine by one drag-move tick."""
    if not state.is_active:
        return Step(state)

    over = classification.over
    over_id = over.id if over else None
    over_index = over.index if over else None
    effects = []

    active_loc = find_item(items, state.active_id)
    if active_loc is not None and not active_loc.in_root:
        if over_id == OUTSIDE_REGION_ID:
            if state.phase in (DragPhase.DRAG_OUT_ARMED, DragPhase.DRAG_OUT_PENDING):
                return Step(state)
            armed = replace(
                state,
                phase=DragPhase.DRAG_OUT_ARMED,
                over_id=over_id,
                over_index=None,
                collision=classification.kind,
            )
            return Step(armed, _CANCEL_MERGE + (Effect.START_DRAG_OUT_TIMER,))
        if state.phase == DragPhase.DRAG_OUT_ARMED:
            effects.append(Effect.CANCEL_DRAG_OUT_TIMER)
            state = replace(state, phase=DragPhase.DRAGGING, over_id=None, over_index=None)

    if over_id is None or over_id == state.active_id:
        cleared = replace(
            state, phase=DragPhase.DRAGGING, over_id=None, over_index=None, collision=classification.kind
        )
        return Step(cleared, tuple(effects) + _CANCEL_MERGE)

    armed_phases = (DragPhase.ARMED, DragPhase.MERGE_PENDING)

    if over_id == state.over_id:
        if classification.kind != CollisionKind.OVERLAP:
            if state.phase in armed_phases:
                effects.extend(_CANCEL_MERGE)
            return Step(
                replace(state, phase=DragPhase.DRAGGING, collision=classification.kind),
                tuple(effects),
            )

        if state.over_index is not None and over_index != state.over_index:
            # A sibling reorder moved the target underneath the pointer
            if state.phase in armed_phases:
                effects.extend(_CANCEL_MERGE)
            return Step(
                replace(state, phase=DragPhase.DRAGGING, over_index=over_index, collision=classification.kind),
                tuple(effects),
            )

        if state.phase in armed_phases:
            return Step(state, tuple(effects))

        if is_merge_eligible(items, state.active_id, over_id):
            rearmed = replace(state, phase=DragPhase.ARMED, over_index=over_index, collision=classification.kind)
            return Step(rearmed, tuple(effects) + (Effect.START_MERGE_TIMER,))
        return Step(replace(state, collision=classification.kind), tuple(effects))

    # New over target: any previous merge attempt is void
    effects.extend(_CANCEL_MERGE)
    tracked = replace(
        state,
        phase=DragPhase.DRAGGING,
        over_id=over_id,
        over_index=over_index,
        collision=classification.kind,
    )
    if classification.kind == CollisionKind.OVERLAP and is_merge_eligible(items, state.active_id, over_id):
        return Step(replace(tracked, phase=DragPhase.ARMED), tuple(effects) + (Effect.START_MERGE_TIMER,))
    return Step(tracked, tuple(effects))


def merge_timer_fired(state: DragState, session: int, target_id: Optional[str]) -> Step:
    """Promotes an armed target to merge-pending unless the timer is stale."""
    if state.session != session or state.phase != DragPhase.ARMED or state.over_id != target_id:
        return Step(state)
    return Step(replace(state, phase=DragPhase.MERGE_PENDING), (Effect.SET_MERGE_CANDIDATE,))


def drag_out_timer_fired(state: DragState, session: int) -> Step:
    if state.session != session or state.phase != DragPhase.DRAG_OUT_ARMED:
        return Step(state)
    return Step(replace(state, phase=DragPhase.DRAG_OUT_PENDING), (Effect.APPLY_DRAG_OUT,))


def after_drag_out(state: DragState) -> Step:
    """Clean dragging state once the ejected item sits in the root sequence."""
    return Step(replace(state, phase=DragPhase.DRAGGING, over_id=None, over_index=None, collision=None))


def end(state: DragState) -> Tuple[DropDecision, Step]:
    """Decides merge versus reorder on release and returns to idle."""
    if not state.is_active:
        return DropDecision(DropAction.NONE), Step(IDLE)

    teardown = (
        Effect.CANCEL_MERGE_TIMER,
        Effect.CANCEL_DRAG_OUT_TIMER,
        Effect.CLEAR_MERGE_CANDIDATE,
    )
    final_over = state.over_id
    if state.phase == DragPhase.MERGE_PENDING and state.merge_target == final_over:
        decision = DropDecision(DropAction.MERGE, state.active_id, final_over)
    elif final_over is not None and final_over != state.active_id:
        decision = DropDecision(DropAction.REORDER, state.active_id, final_over)
    else:
        decision = DropDecision(DropAction.NONE, state.active_id, final_over)
    return decision, Step(replace(IDLE, session=state.session), teardown)


def cancel(state: DragState) -> Step:
    return Step(
        replace(IDLE, session=state.session),
        (Effect.CANCEL_MERGE_TIMER, Effect.CANCEL_DRAG_OUT_TIMER, Effect.CLEAR_MERGE_CANDIDATE),
    )
