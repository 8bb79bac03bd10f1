"""Log line markers and compiled regex patterns."""

import re

# BagMgr incremental slot update
# Example: GameLog: Display: [Game] BagMgr@:Modfy BagItem PageId = 102 SlotId = 0 ConfigBaseId = 100300 Num = 671
BAG_MODIFY_MARKER = "BagMgr@:Modfy"

# BagMgr full snapshot (emitted after sorting inventory)
# Example: GameLog: Display: [Game] BagMgr@:InitBagData PageId = 102 SlotId = 0 ConfigBaseId = 100300 Num = 609
BAG_INIT_MARKER = "BagMgr@:InitBagData"

# BagMgr slot removal
# Example: GameLog: Display: [Game] BagMgr@:RemoveBagItem PageId = 103 SlotId = 39
BAG_REMOVE_MARKER = "BagMgr@:RemoveBagItem"

# Field names shared by all BagMgr lines
PAGE_FIELD = "PageId"
SLOT_FIELD = "SlotId"
ITEM_FIELD = "ConfigBaseId"
NUM_FIELD = "Num"

# ItemChange context markers
# Example: GameLog: Display: [Game] ItemChange@ ProtoName=PickItems start
# Example: GameLog: Display: [Game] ItemChange@ ProtoName=ResetItemsLayout end
ITEM_CHANGE_MARKER = "ItemChange@"
ITEM_CHANGE_PATTERN = re.compile(
    r"ItemChange@.*?ProtoName=(?P<proto_name>\S+)\s+(?P<marker>start|end)\s*$"
)

# Zone transition completed
# Example: SceneLevelMgr@ OpenMainWorld END! InMainLevelPath = /Game/Art/Maps/02KD/KD_YuanSuKuangDong000/KD_YuanSuKuangDong000
LEVEL_EVENT_MARKER = "OpenMainWorld END!"
LEVEL_EVENT_PATTERN = re.compile(r"InMainLevelPath\s*=\s*(?P<level_path>.*\S)")

# Context labels
PICK_ITEMS_LABEL = "PickItems"  # loot pickup
RESET_ITEMS_LAYOUT_LABEL = "ResetItemsLayout"  # inventory sort

# Known hub/hideout zone patterns (maps share zone codes with hideouts,
# so hideouts are matched by name)
HUB_ZONE_PATTERNS = [
    re.compile(r"hideout", re.IGNORECASE),
    re.compile(r"town", re.IGNORECASE),
    re.compile(r"hub", re.IGNORECASE),
    re.compile(r"lobby", re.IGNORECASE),
    re.compile(r"YuJinZhiXiBiNanSuo", re.IGNORECASE),  # Ember's Rest
    re.compile(r"ShengTingZhuangYuan(?!000)", re.IGNORECASE),  # Sacred Court Manor (000 is a map)
    re.compile(r"ZhuCheng", re.IGNORECASE),  # Main city
    re.compile(r"LoginScene", re.IGNORECASE),
]

# Flame Elementium ConfigBaseId (primary currency)
FE_CONFIG_BASE_ID = "100300"
