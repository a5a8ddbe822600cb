from bizcore.models.database import Base, ModuleStateBlob, Organization, OrgModule

__all__ = ["Base", "ModuleStateBlob", "Organization", "OrgModule"]
