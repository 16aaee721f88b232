import os

import pytest

from caesar_cracker.fileio import ENCODING

# Qt без дисплея
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

RYABA = (
    "жили были дед да баба, и была у них курочка ряба. снесла курочка яичко, "
    "не простое, а золотое. дед бил, бил, не разбил. баба била, била, не разбила. "
    "мышка бежала, хвостиком махнула, яичко упало и разбилось. дед плачет, баба плачет, "
    "а курочка кудахчет: не плачь, дед, не плачь, баба! я снесу вам яичко другое, "
    "не золотое, а простое."
)

SAMPLE = (
    "в тот вечер на улице было тихо и тепло. старый дом стоял на краю деревни, "
    "за ним начинался лес, а перед ним текла широкая река. по вечерам мы сидели "
    "на крыльце и слушали, как шумят деревья. дед рассказывал нам истории о том, "
    "как он в молодости ходил на охоту, как ловил рыбу и как однажды встретил "
    "медведя. бабушка пекла пироги, и запах теста и яблок стоял по всему двору. "
    "когда солнце садилось, небо становилось красным, а потом синим. мы смотрели "
    "на звезды и мечтали о дальних странах, о морях и городах, которых никогда не "
    "видели. утром мы снова бежали к реке, купались, строили плоты и спорили о том, "
    "кто первым доплывет до другого берега. лето казалось бесконечным, и никто из "
    "нас не думал, что скоро придется уезжать. \"вернемся ли мы сюда?\" спрашивал "
    "младший брат, а старшая сестра отвечала: \"конечно, вернемся!\""
)


@pytest.fixture
def ryaba():
    return RYABA


@pytest.fixture
def sample():
    return SAMPLE


@pytest.fixture
def write_cp1251(tmp_path):
    def write(name, text):
        path = tmp_path / name
        path.write_text(text, encoding=ENCODING)
        return path
    return write
