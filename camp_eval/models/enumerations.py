from enum import Enum, IntEnum

class CampState(str, Enum):
    LAGOS = "Lagos"
    ONDO = "Ondo"

class Batch(str, Enum):
    BATCH_A = "Batch A"
    BATCH_B = "Batch B"
    BATCH_C = "Batch C"

class StateOfOrigin(str, Enum):
    ABIA = "Abia"
    ADAMAWA = "Adamawa"
    AKWA_IBOM = "Akwa Ibom"
    ANAMBRA = "Anambra"
    BAUCHI = "Bauchi"
    BAYELSA = "Bayelsa"
    BENUE = "Benue"
    BORNO = "Borno"
    CROSS_RIVER = "Cross River"
    DELTA = "Delta"
    EBONYI = "Ebonyi"
    EDO = "Edo"
    EKITI = "Ekiti"
    ENUGU = "Enugu"
    FCT = "FCT"
    GOMBE = "Gombe"
    IMO = "Imo"
    JIGAWA = "Jigawa"
    KADUNA = "Kaduna"
    KANO = "Kano"
    KATSINA = "Katsina"
    KEBBI = "Kebbi"
    KOGI = "Kogi"
    KWARA = "Kwara"
    LAGOS = "Lagos"
    NASARAWA = "Nasarawa"
    NIGER = "Niger"
    OGUN = "Ogun"
    ONDO = "Ondo"
    OSUN = "Osun"
    OYO = "Oyo"
    PLATEAU = "Plateau"
    RIVERS = "Rivers"
    SOKOTO = "Sokoto"
    TARABA = "Taraba"
    YOBE = "Yobe"
    ZAMFARA = "Zamfara"

class FormSection(IntEnum):
    CAMP_PLATOON = 1   # Camp state, state code, platoon
    PERSONAL = 2       # Call-up number, names, origin, batch, phone
    EDUCATION = 3      # Qualification, specialization, institutions

class Role(str, Enum):
    PLATOON_INSTRUCTOR = "platoon_instructor"
    MAN_O_WAR = "man_o_war"
    SQUAD_INSTRUCTOR = "squad_instructor"
    COMMANDANT = "commandant"
    SOLDIER = "soldier"

class MemberStatus(str, Enum):
    SUBMITTED = "submitted"
    RATED = "rated"

RATER_ROLES = (Role.PLATOON_INSTRUCTOR, Role.MAN_O_WAR, Role.SQUAD_INSTRUCTOR)
REVIEWER_ROLES = (Role.COMMANDANT, Role.SOLDIER)
COMMENTER_ROLES = (Role.COMMANDANT, Role.SOLDIER)
