"""Fixed rule catalog applied by the rules resync. Points carry the sign of the type."""
from typing import List, NamedTuple

from meritboard.core.enums import RuleType


class CatalogRule(NamedTuple):
    code: str
    category: str
    description: str
    points: int
    type: RuleType


M = RuleType.MERIT
D = RuleType.DEMERIT

RULE_CATALOG: List[CatalogRule] = [
    CatalogRule("KT001", "Nề nếp", "Hoàn thành tốt nhiệm vụ sao đỏ", 5, M),
    CatalogRule("KT002", "Nề nếp", "Hoàn thành công tác được phân công", 5, M),
    CatalogRule("KT003", "Đạo đức", "Nhặt được của rơi trả lại người mất", 10, M),
    CatalogRule("KT004", "Hoạt động", "Mua báo Đội", 5, M),
    CatalogRule("KT005", "Hoạt động", "Làm bài Xoắn não", 5, M),
    CatalogRule("KT006", "Hoạt động", "Làm bài Lê Quý Đôn", 10, M),
    CatalogRule("KT007", "Hoạt động", "Tham gia sinh hoạt CLB", 10, M),
    CatalogRule("VP001", "Nề nếp", "Đi trễ", -5, D),
    CatalogRule("VP002", "Nề nếp", "Đi trễ không trình diện giám thị", -5, D),
    CatalogRule("VP003", "Nề nếp", "Điểm danh trễ (lớp trưởng)", -5, D),
    CatalogRule("VP004", "Chuyên cần", "Nghỉ học không phép (1 buổi)", -15, D),
    CatalogRule("VP005", "Chuyên cần", "Trốn tiết", -10, D),
    CatalogRule("VP006", "Chuyên cần", "Nghỉ có phép nhưng quá 3 ngày không giấy HT", -5, D),
    CatalogRule("VP007", "Hoạt động", "Không tham dự lễ chào cờ, sinh hoạt tập thể", -10, D),
    CatalogRule("VP008", "An ninh", "Tự ý rời trường trong giờ học", -15, D),
    CatalogRule("VP009", "Học tập", "Không thuộc bài/không làm bài tập", -5, D),
    CatalogRule("VP010", "Học tập", "Không có chữ ký phụ huynh trong sổ báo bài", -5, D),
    CatalogRule("VP011", "Học tập", "Không mang tập vở, SGK, dụng cụ", -5, D),
    CatalogRule("VP012", "Kỷ luật", "Ngồi sai sơ đồ, không tập trung", -5, D),
    CatalogRule("VP013", "Kỷ luật", "Không chép bài/ăn uống trong lớp", -5, D),
    CatalogRule("VP014", "Kỷ luật", "Sử dụng bút xóa sai quy định", -5, D),
    CatalogRule("VP015", "Kỷ luật", "Mất trật tự trong giờ học", -10, D),
    CatalogRule("VP016", "Học tập", "Bỏ kiểm tra thường xuyên/định kỳ không lý do", -15, D),
    CatalogRule("VP017", "Học tập", "Gian lận trong kiểm tra/thi", -20, D),
    CatalogRule("VP018", "Đạo đức", "Bao che, tiếp tay gian lận", -20, D),
    CatalogRule("VP019", "Đạo đức", "Giả mạo chữ ký, sửa điểm, tráo bài", -20, D),
    CatalogRule("VP020", "Nề nếp", "Đồng phục sai quy định (khung)", -5, D),
    CatalogRule("VP021", "Nề nếp", "Không phù hiệu, khăn quàng, huy hiệu", -5, D),
    CatalogRule("VP022", "Nề nếp", "Không thắt lưng (nam), áo bỏ ngoài quần", -5, D),
    CatalogRule("VP023", "Nề nếp", "Váy nữ không đúng quy định", -5, D),
    CatalogRule("VP024", "Nề nếp", "Giày dép sai (dép lê, guốc, giày bánh xe)", -5, D),
    CatalogRule("VP025", "Nề nếp", "Mặc đồng phục thể dục trong tiết văn hóa", -5, D),
    CatalogRule("VP026", "Nề nếp", "Đầu tóc nhuộm, bôi keo, không gọn gàng", -5, D),
    CatalogRule("VP027", "Nề nếp", "Trang điểm, son môi, sơn móng tay", -5, D),
    CatalogRule("VP028", "Nề nếp", "Nam đeo khuyên tai; nữ đeo quá 2 khuyên/1 tai", -5, D),
    CatalogRule("VP029", "Nề nếp", "Balô/cặp sai quy định", -5, D),
    CatalogRule("VP030", "Nề nếp", "Đeo phụ kiện phản cảm", -5, D),
    CatalogRule("VP031", "Kỷ luật", "Đội mũ/nón, trùm hood trong lớp", -5, D),
    CatalogRule("VP032", "Nề nếp", "Mang áo khoác/áo mưa không gọn", -5, D),
    CatalogRule("VP033", "Đạo đức", "Thiếu lễ phép (không chào, cãi lời…)", -5, D),
    CatalogRule("VP034", "Nề nếp", "Đeo khẩu trang che kín mặt không đúng", -5, D),
    CatalogRule("VP035", "Kỷ luật", "Đeo tai nghe trong khuôn viên", -10, D),
    CatalogRule("VP036", "Kỷ luật", "Dùng đồng hồ thông minh bật thông báo", -5, D),
    CatalogRule("VP037", "Kỷ luật", "Dùng thiết bị để gian lận", -20, D),
    CatalogRule("VP038", "Đạo đức", "Nói tục, chửi thề", -10, D),
    CatalogRule("VP039", "Đạo đức", "Thiếu lễ phép (thầy cô, bạn, khách)", -5, D),
    CatalogRule("VP040", "Hoạt động", "Không tham gia hoạt động tập thể", -10, D),
    CatalogRule("VP041", "Nề nếp", "Không xếp hàng, chen lấn, leo lan can", -5, D),
    CatalogRule("VP042", "Nề nếp", "La cà dọc đường, ăn quà trước cổng", -5, D),
    CatalogRule("VP043", "Đạo đức", "Vay mượn tiền, đồ cá nhân", -5, D),
    CatalogRule("VP044", "Đạo đức", "Xúc phạm nhân phẩm bạn", -10, D),
    CatalogRule("VP045", "An ninh mạng", "Đăng tải nội dung không phù hợp", -10, D),
    CatalogRule("VP046", "An ninh", "Tụ tập cản trở giao thông", -15, D),
    CatalogRule("VP047", "An ninh", "Chọc ghẹo, xúi giục đánh nhau", -15, D),
    CatalogRule("VP048", "An ninh mạng", "Tung tin giả, chia rẽ trên MXH", -15, D),
    CatalogRule("VP049", "An ninh", "Đánh nhau, gây thương tích", -20, D),
    CatalogRule("VP050", "An ninh", "Trấn lột, chiếm đoạt tài sản", -20, D),
    CatalogRule("VP051", "An ninh", "Tham gia băng nhóm gây rối", -20, D),
    CatalogRule("VP052", "Đạo đức", "Văn hóa phẩm đồi trụy, độc hại", -20, D),
    CatalogRule("VP053", "Kỷ luật", "Hút thuốc lá, thuốc lá điện tử", -20, D),
    CatalogRule("VP054", "Kỷ luật", "Uống rượu bia, chất kích thích, ma túy", -20, D),
    CatalogRule("VP055", "Tệ nạn xã hội", "Đánh bài, cá độ nhỏ lẻ", -15, D),
    CatalogRule("VP056", "Tệ nạn xã hội", "Tổ chức bài bạc, cá độ ăn tiền", -20, D),
    CatalogRule("VP057", "Vệ sinh", "Không trực nhật đúng khu vực", -5, D),
    CatalogRule("VP058", "Vệ sinh", "Không bỏ rác đúng nơi", -5, D),
    CatalogRule("VP059", "Vệ sinh", "Không dội nước sau vệ sinh", -5, D),
    CatalogRule("VP060", "Tài sản", "Quên tắt điện, khóa cửa", -5, D),
    CatalogRule("VP061", "Tài sản", "Ngồi, bước lên bàn ghế, chạy nhảy bồn cây", -5, D),
    CatalogRule("VP062", "Tài sản", "Viết, vẽ bậy lên bàn ghế, tường", -10, D),
    CatalogRule("VP063", "Tài sản", "Nghịch phá rèm, quạt, loa, kính", -10, D),
    CatalogRule("VP064", "Tài sản", "Bẻ cây, hái hoa", -10, D),
    CatalogRule("VP065", "Tài sản", "Không báo cáo sự cố", -10, D),
    CatalogRule("VP066", "Tài sản", "Xịt nước, bóng nước, ném bột trong lớp/vệ sinh", -10, D),
    CatalogRule("VP067", "An ninh", "Tạt nước, ném bột vào bạn/giáo viên", -15, D),
    CatalogRule("VP068", "An toàn", "Sạc pin xe điện, thiết bị công suất lớn", -15, D),
    CatalogRule("VP069", "An toàn", "Nghịch phá hệ thống PCCC", -15, D),
    CatalogRule("VP070", "An toàn", "Đùa nghịch gây hư hại lớn", -15, D),
    CatalogRule("VP071", "Tài sản", "Cố tình phá hoại tài sản", -20, D),
    CatalogRule("VP072", "An toàn", "Phun bình chữa cháy trái phép", -20, D),
    CatalogRule("VP073", "An toàn", "Gây cháy nổ, hỏng hóc nặng", -20, D),
    CatalogRule("VP074", "Tài sản", "Lợi dụng bóng nước, bột để phá hoại", -20, D),
    CatalogRule("VP075", "An toàn giao thông", "Điều khiển xe đạp, xe đạp điện trong trường", -15, D),
    CatalogRule("VP076", "An toàn giao thông", "Không đội mũ bảo hiểm (xe đạp điện, ngồi sau xe)", -10, D),
    CatalogRule("VP077", "An toàn giao thông", "Điều khiển xe máy chưa đủ tuổi", -20, D),
    CatalogRule("VP078", "Tài sản", "Tổ trực không tắt đèn, quạt trước khi ra về, trong giờ ra chơi", -10, D),
    CatalogRule("VP079", "Nề nếp", "Tổ trực không trực lớp", -10, D),
    CatalogRule("VP080", "Tài sản", "Tổ trực không khóa cửa lớp giờ ra chơi; ra về (buổi chiều)", -10, D),
    CatalogRule("VP081", "Nề nếp", "Lớp không tập trung theo hiệu lệnh", -20, D),
    CatalogRule("VP082", "Nề nếp", "Di chuyển không đúng mục đích, lang thang trong trường, la cà trong giờ học/giờ ra chơi mà không thực hiện nhiệm vụ", -5, D),
    CatalogRule("VP083", "Kỷ luật/An ninh", "Đánh nhau/xô xát mức nhẹ, đùa nghịch quá trớn gây va chạm nhưng chưa gây thương tích", -10, D),
]
