"""Builders for realistic game log lines."""

PREFIX = "[2026.01.27-12.36.57:776][ 65]GameLog: Display: [Game] "


def modify(page_id: int, slot_id: int, config_base_id, num: int) -> str:
    return (
        f"{PREFIX}BagMgr@:Modfy BagItem PageId = {page_id} SlotId = {slot_id} "
        f"ConfigBaseId = {config_base_id} Num = {num}"
    )


def init(page_id: int, slot_id: int, config_base_id, num: int) -> str:
    return (
        f"{PREFIX}BagMgr@:InitBagData PageId = {page_id} SlotId = {slot_id} "
        f"ConfigBaseId = {config_base_id} Num = {num}"
    )


def remove(page_id: int, slot_id: int) -> str:
    return f"{PREFIX}BagMgr@:RemoveBagItem PageId = {page_id} SlotId = {slot_id}"


def context(proto_name: str, marker: str) -> str:
    return f"{PREFIX}ItemChange@ ProtoName={proto_name} {marker}"


def pick_start() -> str:
    return context("PickItems", "start")


def pick_end() -> str:
    return context("PickItems", "end")


def sort_block() -> list[str]:
    return [
        context("ResetItemsLayout", "start"),
        f"{PREFIX}ItemChange@ Reset PageId=102",
        context("ResetItemsLayout", "end"),
    ]


def level(path: str) -> str:
    return f"{PREFIX}SceneLevelMgr@ OpenMainWorld END! InMainLevelPath = {path}"


HIDEOUT = "/Game/Art/Maps/01SD/XZ_YuJinZhiXiBiNanSuo200/XZ_YuJinZhiXiBiNanSuo200"
MINE = "/Game/Art/Maps/02KD/KD_YuanSuKuangDong000/KD_YuanSuKuangDong000"
