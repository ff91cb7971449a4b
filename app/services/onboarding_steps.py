from enum import Enum


class JoinDirectoryStep(str, Enum):
    INTRO = "intro"
    GENERAL = "general"
    PERSONAL = "personal"
    SOCIALS = "socials"
    ICEBREAKERS = "icebreakers"
    FINISH = "finish"


JOIN_DIRECTORY_STEPS: tuple[JoinDirectoryStep, ...] = tuple(JoinDirectoryStep)

_STEP_PATHS: dict[JoinDirectoryStep, str] = {
    JoinDirectoryStep.INTRO: "/directory/join",
    JoinDirectoryStep.GENERAL: "/directory/join/1",
    JoinDirectoryStep.PERSONAL: "/directory/join/2",
    JoinDirectoryStep.SOCIALS: "/directory/join/3",
    JoinDirectoryStep.ICEBREAKERS: "/directory/join/4",
    JoinDirectoryStep.FINISH: "/directory/join/finish",
}


def step_path(step: JoinDirectoryStep) -> str:
    return _STEP_PATHS[JoinDirectoryStep(step)]


def next_step(step: JoinDirectoryStep) -> JoinDirectoryStep | None:
    index = JOIN_DIRECTORY_STEPS.index(JoinDirectoryStep(step))
    if index + 1 < len(JOIN_DIRECTORY_STEPS):
        return JOIN_DIRECTORY_STEPS[index + 1]
    return None


def previous_step(step: JoinDirectoryStep) -> JoinDirectoryStep | None:
    index = JOIN_DIRECTORY_STEPS.index(JoinDirectoryStep(step))
    if index > 0:
        return JOIN_DIRECTORY_STEPS[index - 1]
    return None
