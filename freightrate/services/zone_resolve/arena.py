# freightrate/services/zone_resolve/arena.py
from __future__ import annotations

from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from freightrate.models.region import Region


class RegionArena:
    """
    按 id 寻址的区域池：父链只存 parent_region_id，向上走时按 id 取，
    同一请求内每个区域最多读库一次。

    数据若被误配成环，chain() 遇到已访问的 id 即停止，不会死循环。
    """

    def __init__(self, db: Session, seed: Optional[List[Region]] = None) -> None:
        self._db = db
        self._by_id: Dict[int, Region] = {}
        for r in seed or []:
            self._by_id[r.id] = r

    def get(self, region_id: Optional[int]) -> Optional[Region]:
        if region_id is None:
            return None
        hit = self._by_id.get(region_id)
        if hit is not None:
            return hit
        row = self._db.get(Region, region_id)
        if row is not None:
            self._by_id[row.id] = row
        return row

    def parent(self, region: Region) -> Optional[Region]:
        return self.get(region.parent_region_id)

    def chain(self, region: Region) -> List[Region]:
        """region 自身在首位，依次向上直到根（通常是 country）。"""
        out: List[Region] = [region]
        seen = {region.id}
        cur = self.parent(region)
        while cur is not None and cur.id not in seen:
            out.append(cur)
            seen.add(cur.id)
            cur = self.parent(cur)
        return out
