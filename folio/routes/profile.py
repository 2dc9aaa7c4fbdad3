"""Profile endpoints."""

from fastapi import APIRouter, Depends

from folio.dependencies import get_accounts, get_profiles
from folio.models.request_models import (
    EducationRequest,
    EducationUpdateRequest,
    ExperienceRequest,
    ExperienceUpdateRequest,
    ProfileRequest,
)
from folio.models.response_models import DataResponse, ErrorResponse, MessageResponse
from folio.services.accounts import AccountService
from folio.services.auth_gate import CurrentUser
from folio.services.profiles import ProfileReconciler
from folio.utils.serialization import public

router = APIRouter(prefix="/profile", tags=["profile"])

NOT_FOUND = {404: {"description": "Profile or entry not found", "model": ErrorResponse}}


def _entry_fields(payload, partial: bool = False) -> dict:
    # Dates are stored as ISO strings
    return payload.model_dump(mode="json", by_alias=True, exclude_unset=partial)


@router.get("/me", response_model=DataResponse, summary="Caller's profile", responses=NOT_FOUND)
async def get_my_profile(caller_id: CurrentUser, profiles: ProfileReconciler = Depends(get_profiles)):
    return DataResponse(data=public(await profiles.get_mine(caller_id)))


@router.post(
    "",
    response_model=DataResponse,
    summary="Create or update profile",
    description="Creates the caller's profile or patches the fields present in the request",
)
async def upsert_profile(
    payload: ProfileRequest,
    caller_id: CurrentUser,
    profiles: ProfileReconciler = Depends(get_profiles)
):
    present = payload.model_fields_set | set(payload.model_extra or {})
    raw = {key: value for key, value in payload.model_dump().items() if key in present}
    profile = await profiles.upsert(caller_id, raw)
    return DataResponse(data=public(profile))


@router.get("", response_model=DataResponse, summary="All profiles")
async def list_profiles(profiles: ProfileReconciler = Depends(get_profiles)):
    return DataResponse(data=public(await profiles.list_all()))


@router.get("/user/{user_id}", response_model=DataResponse, summary="Profile by user", responses=NOT_FOUND)
async def get_profile_by_user(user_id: str, profiles: ProfileReconciler = Depends(get_profiles)):
    return DataResponse(data=public(await profiles.get_by_user(user_id)))


@router.delete("", response_model=MessageResponse, summary="Delete profile, content and user")
async def delete_profile(caller_id: CurrentUser, accounts: AccountService = Depends(get_accounts)):
    await accounts.delete_account(caller_id)
    return MessageResponse(msg="Profile and User Deleted")


@router.put("/experience", response_model=DataResponse, summary="Add experience", responses=NOT_FOUND)
async def add_experience(
    payload: ExperienceRequest,
    caller_id: CurrentUser,
    profiles: ProfileReconciler = Depends(get_profiles)
):
    profile = await profiles.add_experience(caller_id, _entry_fields(payload))
    return DataResponse(data=public(profile))


@router.put("/experience/{exp_id}", response_model=DataResponse, summary="Edit experience", responses=NOT_FOUND)
async def update_experience(
    exp_id: str,
    payload: ExperienceUpdateRequest,
    caller_id: CurrentUser,
    profiles: ProfileReconciler = Depends(get_profiles)
):
    profile = await profiles.update_experience(caller_id, exp_id, _entry_fields(payload, partial=True))
    return DataResponse(data=public(profile))


@router.delete("/experience/{exp_id}", response_model=DataResponse, summary="Remove experience", responses=NOT_FOUND)
async def remove_experience(
    exp_id: str,
    caller_id: CurrentUser,
    profiles: ProfileReconciler = Depends(get_profiles)
):
    return DataResponse(data=public(await profiles.remove_experience(caller_id, exp_id)))


@router.post("/education", response_model=DataResponse, summary="Add education", responses=NOT_FOUND)
async def add_education(
    payload: EducationRequest,
    caller_id: CurrentUser,
    profiles: ProfileReconciler = Depends(get_profiles)
):
    profile = await profiles.add_education(caller_id, _entry_fields(payload))
    return DataResponse(data=public(profile))


@router.put("/education/{edu_id}", response_model=DataResponse, summary="Edit education", responses=NOT_FOUND)
async def update_education(
    edu_id: str,
    payload: EducationUpdateRequest,
    caller_id: CurrentUser,
    profiles: ProfileReconciler = Depends(get_profiles)
):
    profile = await profiles.update_education(caller_id, edu_id, _entry_fields(payload, partial=True))
    return DataResponse(data=public(profile))


@router.delete("/education/{edu_id}", response_model=DataResponse, summary="Remove education", responses=NOT_FOUND)
async def remove_education(
    edu_id: str,
    caller_id: CurrentUser,
    profiles: ProfileReconciler = Depends(get_profiles)
):
    return DataResponse(data=public(await profiles.remove_education(caller_id, edu_id)))
