"""Opcode tables used to render Scratch 3 block graphs as scratchblocks text."""

from typing import Dict, FrozenSet, List, Tuple

# Opcodes that start a script when they sit at the top of a stack.
HAT_OPCODES: FrozenSet[str] = frozenset({
    "event_whenflagclicked",
    "event_whenkeypressed",
    "event_whengreaterthan",
    "event_whenthisspriteclicked",
    "event_whenstageclicked",
    "event_whenbackdropswitchesto",
    "event_whenbroadcastreceived",
    "control_start_as_clone",
    "procedures_definition",
    "boost_whenColor",
    "boost_whenTilted",
    "ev3_whenButtonPressed",
    "ev3_whenDistanceLessThan",
    "ev3_whenBrightnessLessThan",
    "gdxfor_whenGesture",
    "gdxfor_whenForcePushedOrPulled",
    "gdxfor_whenTilted",
    "makeymakey_whenMakeyKeyPressed",
    "makeymakey_whenCodePressed",
    "microbit_whenButtonPressed",
    "microbit_whenGesture",
    "microbit_whenTilted",
    "microbit_whenPinConnected",
    "wedo2_whenDistance",
    "wedo2_whenTilted",
})

# C-shaped blocks: the substack inputs rendered inside them, in order, and the
# divider line emitted before each substack after the first.
C_BLOCK_BRANCHES: Dict[str, List[Tuple[str, str]]] = {
    "control_forever": [("SUBSTACK", "")],
    "control_repeat": [("SUBSTACK", "")],
    "control_repeat_until": [("SUBSTACK", "")],
    "control_while": [("SUBSTACK", "")],
    "control_for_each": [("SUBSTACK", "")],
    "control_if": [("SUBSTACK", "")],
    "control_if_else": [("SUBSTACK", ""), ("SUBSTACK2", "else")],
}

C_BLOCK_END = "end"

# Format strings keyed by opcode. Placeholders name an input or a field of the
# block; inputs are substituted with their rendered text, fields with the raw
# field value.
OPCODE_MAP: Dict[str, str] = {
    # Events
    "event_whenflagclicked": "when flag clicked",
    "event_whenkeypressed": "when [{KEY_OPTION} v] key pressed",
    "event_whenthisspriteclicked": "when this sprite clicked",
    "event_whenstageclicked": "when stage clicked",
    "event_whenbackdropswitchesto": "when backdrop switches to [{BACKDROP} v]",
    "event_whengreaterthan": "when [{WHENGREATERTHANMENU} v] > {VALUE}",
    "event_whenbroadcastreceived": "when I receive [{BROADCAST_OPTION} v]",
    "event_broadcast": "broadcast {BROADCAST_INPUT}",
    "event_broadcastandwait": "broadcast {BROADCAST_INPUT} and wait",
    "event_broadcast_menu": "({BROADCAST_OPTION} v)",

    # Motion
    "motion_movesteps": "move {STEPS} steps",
    "motion_turnright": "turn cw {DEGREES} degrees",
    "motion_turnleft": "turn ccw {DEGREES} degrees",
    "motion_goto": "go to {TO}",
    "motion_goto_menu": "({TO} v)",
    "motion_gotoxy": "go to x: {X} y: {Y}",
    "motion_glideto": "glide {SECS} secs to {TO}",
    "motion_glideto_menu": "({TO} v)",
    "motion_glidesecstoxy": "glide {SECS} secs to x: {X} y: {Y}",
    "motion_pointindirection": "point in direction {DIRECTION}",
    "motion_pointtowards": "point towards {TOWARDS}",
    "motion_pointtowards_menu": "({TOWARDS} v)",
    "motion_changexby": "change x by {DX}",
    "motion_setx": "set x to {X}",
    "motion_changeyby": "change y by {DY}",
    "motion_sety": "set y to {Y}",
    "motion_ifonedgebounce": "if on edge, bounce",
    "motion_setrotationstyle": "set rotation style [{STYLE} v]",
    "motion_xposition": "(x position)",
    "motion_yposition": "(y position)",
    "motion_direction": "(direction)",

    # Looks
    "looks_sayforsecs": "say {MESSAGE} for {SECS} seconds",
    "looks_say": "say {MESSAGE}",
    "looks_thinkforsecs": "think {MESSAGE} for {SECS} seconds",
    "looks_think": "think {MESSAGE}",
    "looks_switchcostumeto": "switch costume to {COSTUME}",
    "looks_costume": "({COSTUME} v)",
    "looks_nextcostume": "next costume",
    "looks_switchbackdropto": "switch backdrop to {BACKDROP}",
    "looks_switchbackdroptoandwait": "switch backdrop to {BACKDROP} and wait",
    "looks_backdrops": "({BACKDROP} v)",
    "looks_nextbackdrop": "next backdrop",
    "looks_changesizeby": "change size by {CHANGE}",
    "looks_setsizeto": "set size to {SIZE} %",
    "looks_changeeffectby": "change [{EFFECT} v] effect by {CHANGE}",
    "looks_seteffectto": "set [{EFFECT} v] effect to {VALUE}",
    "looks_cleargraphiceffects": "clear graphic effects",
    "looks_show": "show",
    "looks_hide": "hide",
    "looks_gotofrontback": "go to [{FRONT_BACK} v] layer",
    "looks_goforwardbackwardlayers": "go [{FORWARD_BACKWARD} v] {NUM} layers",
    "looks_costumenumbername": "(costume [{NUMBER_NAME} v])",
    "looks_backdropnumbername": "(backdrop [{NUMBER_NAME} v])",
    "looks_size": "(size)",

    # Sound
    "sound_playuntildone": "play sound {SOUND_MENU} until done",
    "sound_play": "start sound {SOUND_MENU}",
    "sound_sounds_menu": "({SOUND_MENU} v)",
    "sound_stopallsounds": "stop all sounds",
    "sound_changeeffectby": "change [{EFFECT} v] effect by {VALUE}",
    "sound_seteffectto": "set [{EFFECT} v] effect to {VALUE}",
    "sound_cleareffects": "clear sound effects",
    "sound_changevolumeby": "change volume by {VOLUME}",
    "sound_setvolumeto": "set volume to {VOLUME} %",
    "sound_volume": "(volume)",

    # Control
    "control_wait": "wait {DURATION} seconds",
    "control_repeat": "repeat {TIMES}",
    "control_forever": "forever",
    "control_if": "if {CONDITION} then",
    "control_if_else": "if {CONDITION} then",
    "control_wait_until": "wait until {CONDITION}",
    "control_repeat_until": "repeat until {CONDITION}",
    "control_while": "while {CONDITION}",
    "control_for_each": "for each [{VARIABLE} v] in {VALUE}",
    "control_stop": "stop [{STOP_OPTION} v]",
    "control_start_as_clone": "when I start as a clone",
    "control_create_clone_of": "create clone of {CLONE_OPTION}",
    "control_create_clone_of_menu": "({CLONE_OPTION} v)",
    "control_delete_this_clone": "delete this clone",

    # Sensing
    "sensing_touchingobject": "<touching {TOUCHINGOBJECTMENU} ?>",
    "sensing_touchingobjectmenu": "({TOUCHINGOBJECTMENU} v)",
    "sensing_touchingcolor": "<touching color {COLOR} ?>",
    "sensing_coloristouchingcolor": "<color {COLOR} is touching {COLOR2} ?>",
    "sensing_distanceto": "(distance to {DISTANCETOMENU})",
    "sensing_distancetomenu": "({DISTANCETOMENU} v)",
    "sensing_askandwait": "ask {QUESTION} and wait",
    "sensing_answer": "(answer)",
    "sensing_keypressed": "<key {KEY_OPTION} pressed?>",
    "sensing_keyoptions": "({KEY_OPTION} v)",
    "sensing_mousedown": "<mouse down?>",
    "sensing_mousex": "(mouse x)",
    "sensing_mousey": "(mouse y)",
    "sensing_setdragmode": "set drag mode [{DRAG_MODE} v]",
    "sensing_loudness": "(loudness)",
    "sensing_loud": "<loud?>",
    "sensing_timer": "(timer)",
    "sensing_resettimer": "reset timer",
    "sensing_of": "([{PROPERTY} v] of {OBJECT})",
    "sensing_of_object_menu": "({OBJECT} v)",
    "sensing_current": "(current [{CURRENTMENU} v])",
    "sensing_dayssince2000": "(days since 2000)",
    "sensing_username": "(username)",

    # Operators
    "operator_add": "({NUM1} + {NUM2})",
    "operator_subtract": "({NUM1} - {NUM2})",
    "operator_multiply": "({NUM1} * {NUM2})",
    "operator_divide": "({NUM1} / {NUM2})",
    "operator_random": "(pick random {FROM} to {TO})",
    "operator_gt": "<{OPERAND1} > {OPERAND2}>",
    "operator_lt": "<{OPERAND1} < {OPERAND2}>",
    "operator_equals": "<{OPERAND1} = {OPERAND2}>",
    "operator_and": "<{OPERAND1} and {OPERAND2}>",
    "operator_or": "<{OPERAND1} or {OPERAND2}>",
    "operator_not": "<not {OPERAND}>",
    "operator_join": "(join {STRING1} {STRING2})",
    "operator_letter_of": "(letter {LETTER} of {STRING})",
    "operator_length": "(length of {STRING})",
    "operator_contains": "<{STRING1} contains {STRING2} ?>",
    "operator_mod": "({NUM1} mod {NUM2})",
    "operator_round": "(round {NUM})",
    "operator_mathop": "([{OPERATOR} v] of {NUM})",

    # Variables and lists
    "data_variable": "({VARIABLE})",
    "data_setvariableto": "set [{VARIABLE} v] to {VALUE}",
    "data_changevariableby": "change [{VARIABLE} v] by {VALUE}",
    "data_showvariable": "show variable [{VARIABLE} v]",
    "data_hidevariable": "hide variable [{VARIABLE} v]",
    "data_listcontents": "({LIST} :: list)",
    "data_addtolist": "add {ITEM} to [{LIST} v]",
    "data_deleteoflist": "delete {INDEX} of [{LIST} v]",
    "data_deletealloflist": "delete all of [{LIST} v]",
    "data_insertatlist": "insert {ITEM} at {INDEX} of [{LIST} v]",
    "data_replaceitemoflist": "replace item {INDEX} of [{LIST} v] with {ITEM}",
    "data_itemoflist": "(item {INDEX} of [{LIST} v])",
    "data_itemnumoflist": "(item # of {ITEM} in [{LIST} v])",
    "data_lengthoflist": "(length of [{LIST} v])",
    "data_listcontainsitem": "<[{LIST} v] contains {ITEM} ?>",
    "data_showlist": "show list [{LIST} v]",
    "data_hidelist": "hide list [{LIST} v]",

    # Pen extension (lower and camel case spellings both appear in the wild)
    "pen_clear": "erase all",
    "pen_stamp": "stamp",
    "pen_penDown": "pen down",
    "pen_pendown": "pen down",
    "pen_penUp": "pen up",
    "pen_penup": "pen up",
    "pen_setPenColorToColor": "set pen color to {COLOR}",
    "pen_setpencolortocolor": "set pen color to {COLOR}",
    "pen_changePenColorParamBy": "change pen {COLOR_PARAM} by {VALUE}",
    "pen_setPenColorParamTo": "set pen {COLOR_PARAM} to {VALUE}",
    "pen_menu_colorParam": "({colorParam} v)",
    "pen_changePenSizeBy": "change pen size by {SIZE}",
    "pen_changepensizeby": "change pen size by {SIZE}",
    "pen_setPenSizeTo": "set pen size to {SIZE}",
    "pen_setpensizeto": "set pen size to {SIZE}",

    # Music extension
    "music_playDrumForBeats": "play drum {DRUM} for {BEATS} beats",
    "music_menu_DRUM": "({DRUM} v)",
    "music_restForBeats": "rest for {BEATS} beats",
    "music_playNoteForBeats": "play note {NOTE} for {BEATS} beats",
    "note": "({NOTE})",
    "music_setInstrument": "set instrument to {INSTRUMENT}",
    "music_menu_INSTRUMENT": "({INSTRUMENT} v)",
    "music_setTempo": "set tempo to {TEMPO}",
    "music_changeTempo": "change tempo by {TEMPO}",
    "music_getTempo": "(tempo)",

    # Argument reporters used inside custom block definitions
    "argument_reporter_string_number": "({VALUE})",
    "argument_reporter_boolean": "<{VALUE}>",
}

# Reporter inputs whose missing operand still needs a visible boolean slot.
BOOLEAN_INPUT_NAMES: FrozenSet[str] = frozenset({"CONDITION", "OPERAND", "OPERAND1", "OPERAND2"})

# Opcode prefixes that imply a Scratch extension is in use.
EXTENSION_PREFIXES: Dict[str, str] = {
    "pen": "pen",
    "music": "music",
    "text2speech": "text2speech",
    "translate": "translate",
    "videoSensing": "videoSensing",
    "faceSensing": "faceSensing",
    "ev3": "ev3",
    "microbit": "microbit",
    "wedo2": "wedo2",
    "makeymakey": "makeymakey",
    "boost": "boost",
    "gdxfor": "gdxfor",
}


def extension_for_opcode(opcode: str) -> str:
    """Return the extension id an opcode belongs to, or an empty string."""
    prefix = opcode.split("_", 1)[0] if "_" in opcode else ""
    return EXTENSION_PREFIXES.get(prefix, "")
